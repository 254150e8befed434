import itertools
from dataclasses import replace

import pytest

from directions.models import DirectionsFailure, DirectionsResult
from routes.models import BuildStep, RouteState
from store.client import StoreError
from store.collections import MarkerCollection, RouteCollection


class MockStore:
    """
    In-memory stand-in for StoreClient. Any method name put in `failing`
    raises StoreError instead of running.
    """

    def __init__(self):
        self.routes = []
        self.markers = []
        self.states = {}
        self.failing = set()
        self.calls = []
        self._ids = itertools.count(1)

    def _call(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise StoreError(f"{name} failed", status_code=500)

    def list_routes(self):
        self._call("list_routes")
        return list(self.routes)

    def create_route(self, route):
        self._call("create_route")
        saved = replace(route, id=f"r{next(self._ids)}")
        self.routes.insert(0, saved)
        return saved

    def update_route(self, route_id, fields):
        self._call("update_route")
        for index, route in enumerate(self.routes):
            if route.id == route_id:
                self.routes[index] = route.with_color(fields["color"])
                return self.routes[index]
        raise StoreError("not found", status_code=404)

    def delete_route(self, route_id):
        self._call("delete_route")
        self.routes = [route for route in self.routes if route.id != route_id]

    def list_markers(self):
        self._call("list_markers")
        return list(self.markers)

    def create_marker(self, marker):
        self._call("create_marker")
        saved = replace(marker, id=f"m{next(self._ids)}")
        self.markers.insert(0, saved)
        return saved

    def delete_marker(self, marker_id):
        self._call("delete_marker")
        self.markers = [marker for marker in self.markers if marker.id != marker_id]

    def get_route_state(self, session_key):
        self._call("get_route_state")
        return self.states.setdefault(session_key, RouteState(session_key=session_key, step=BuildStep.WAYPOINT))

    def put_route_state(self, state):
        self._call("put_route_state")
        self.states[state.session_key] = state
        return state


class MockDirections:
    """
    Returns a straight three-point path through the request, or whatever
    `next_outcome` is set to.
    """

    def __init__(self):
        self.requests = []
        self.next_outcome = None

    def route(self, origin, destination, waypoints=(), mode="driving"):
        self.requests.append((origin, destination, list(waypoints), mode))
        if self.next_outcome is not None:
            return self.next_outcome
        path = [origin] + list(waypoints) + [destination]
        return DirectionsResult(overview_path=path, distance_text="120 km", duration_text="1 hour 30 mins")

    def fail_with(self, kind):
        self.next_outcome = DirectionsFailure(kind)


@pytest.fixture
def mock_store():
    return MockStore()


@pytest.fixture
def mock_directions():
    return MockDirections()


@pytest.fixture
def route_collection(mock_store):
    return RouteCollection(mock_store)


@pytest.fixture
def marker_collection(mock_store):
    return MarkerCollection(mock_store)
