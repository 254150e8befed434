import json
from datetime import datetime, timezone

import pytest
import requests

from routes.models import BuildStep, Marker, Point, Route, RouteColor, RouteState
from store.client import StoreClient, StoreError

BASE = "http://store.test/api/v1"

ROUTE_RECORD = {
    "_id": "65f1c0",
    "start": {"lat": 40.0, "lng": -82.0},
    "end": {"lat": 41.0, "lng": -83.0},
    "waypoints": [{"lat": 40.5, "lng": -82.5}],
    "overviewPath": [{"lat": 40.0, "lng": -82.0}, {"lat": 41.0, "lng": -83.0}],
    "distance": "150 km",
    "duration": "2 hours",
    "color": "#FF0000",
    "createdAt": "2024-03-13T10:00:00.000Z",
    "updatedAt": "2024-03-13T10:00:00.000Z",
}


class MockResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body
        self.content = json.dumps(body).encode() if body is not None else b""

    def json(self):
        if self.body is None:
            raise ValueError("no body")
        return self.body


class MockSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(*responses):
    session = MockSession(*responses)
    return StoreClient(base_url=BASE + "/", session=session), session


def test_list_routes_reads_underscore_id_and_timestamps():
    client, session = make_client(MockResponse(200, [ROUTE_RECORD]))

    routes = client.list_routes()

    assert session.requests == [("GET", f"{BASE}/routes/", None)]
    route = routes[0]
    assert route.id == "65f1c0"
    assert route.waypoints == [Point(40.5, -82.5)]
    assert route.color == RouteColor.RED
    assert route.created_at == datetime(2024, 3, 13, 10, 0, tzinfo=timezone.utc)


def test_create_route_never_sends_an_id():
    client, session = make_client(MockResponse(201, ROUTE_RECORD))
    route = Route(start=Point(40.0, -82.0), end=Point(41.0, -83.0), overview_path=[Point(40.0, -82.0)],
                  distance="150 km", duration="2 hours", id="local-123")

    created = client.create_route(route)

    method, url, payload = session.requests[0]
    assert (method, url) == ("POST", f"{BASE}/routes/")
    assert "id" not in payload and "_id" not in payload
    assert payload["overviewPath"] == [{"lat": 40.0, "lng": -82.0}]
    assert payload["color"] == "#0000FF"
    assert created.id == "65f1c0"


def test_update_route_is_partial():
    client, session = make_client(MockResponse(200, dict(ROUTE_RECORD, color="#00FF00")))

    updated = client.update_route("65f1c0", {"color": "#00FF00"})

    assert session.requests == [("PUT", f"{BASE}/routes/65f1c0/", {"color": "#00FF00"})]
    assert updated.color == RouteColor.GREEN


def test_delete_returns_nothing_on_204():
    client, session = make_client(MockResponse(204))
    assert client.delete_route("65f1c0") is None
    assert session.requests[0][:2] == ("DELETE", f"{BASE}/routes/65f1c0/")


def test_validation_failure_raises_store_error_with_body():
    client, _ = make_client(MockResponse(400, {"overviewPath": ["This list may not be empty."]}))

    with pytest.raises(StoreError) as excinfo:
        client.create_marker(Marker(position=Point(1.0, 2.0)))

    assert excinfo.value.status_code == 400
    assert excinfo.value.payload == {"overviewPath": ["This list may not be empty."]}


def test_transport_failure_raises_store_error():
    client, _ = make_client(requests.ConnectionError("refused"))

    with pytest.raises(StoreError) as excinfo:
        client.list_markers()

    assert excinfo.value.status_code is None


def test_markers():
    record = {"id": 7, "position": {"lat": -17.8, "lng": 31.0}}
    client, session = make_client(MockResponse(201, record), MockResponse(200, [record]))

    created = client.create_marker(Marker(position=Point(-17.8, 31.0)))
    listed = client.list_markers()

    assert session.requests[0] == ("POST", f"{BASE}/markers/", {"position": {"lat": -17.8, "lng": 31.0}})
    assert created.id == "7"
    assert listed == [created]


def test_get_route_state_treats_empty_start_as_unset():
    client, session = make_client(MockResponse(200, {"routeStep": "waypoint", "startLocation": {}}))

    state = client.get_route_state("abc")

    assert session.requests[0][:2] == ("GET", f"{BASE}/route-state/abc/")
    assert state == RouteState(session_key="abc", step=BuildStep.WAYPOINT)


def test_put_route_state():
    body = {"sessionKey": "abc", "routeStep": "start", "startLocation": None, "color": "#FFA500"}
    client, session = make_client(MockResponse(200, body))

    state = client.put_route_state(RouteState(session_key="abc", step=BuildStep.START, color=RouteColor.ORANGE))

    assert session.requests[0] == ("PUT", f"{BASE}/route-state/abc/",
                                   {"routeStep": "start", "startLocation": None, "color": "#FFA500"})
    assert state.step == BuildStep.START
    assert state.color == RouteColor.ORANGE
