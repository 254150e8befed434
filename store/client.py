#Purpose: The store "adapter/client".
#Sole responsibility: talk to the map store over HTTP (JSON) and return domain models.
#One resource collection per entity kind:
#/routes/       list, create, update (partial), delete
#/markers/      list, create, delete
#/route-state/  get (lazily created by the store) and put, keyed by session
#No retries, no caching: transport and validation failures surface as StoreError.


from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, List, Optional

import requests

from routes.models import Marker, Route, RouteState

from .serializers import (
    marker_from_payload,
    marker_to_payload,
    route_from_payload,
    route_state_from_payload,
    route_state_to_payload,
    route_to_payload,
)

# Example in .env:
# STORE_BASE_URL=http://localhost:8000/api/v1
load_dotenv()
STORE_BASE_URL = os.getenv("STORE_BASE_URL", "http://localhost:8000/api/v1")

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a store request fails (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class StoreClient:
    """
    Store Adapter / Client

    Sole responsibility:
    - Serialize domain models to the store's JSON shape and back
    - Issue exactly one HTTP request per call
    """

    def __init__(self, base_url: Optional[str] = None, timeout: int = 5, session=None):
        self.base_url = (base_url or STORE_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    #----------------
    # Internal helpers
    #----------------
    def _url(self, *parts: str) -> str:
        path = "/".join(str(part).strip("/") for part in parts)
        return f"{self.base_url}/{path}/"

    def _request(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StoreError(f"{method} {url} failed: {exc}") from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            logger.warning("%s %s -> %s %s", method, url, response.status_code, body)
            raise StoreError(f"{method} {url} returned {response.status_code}",
                             status_code=response.status_code, payload=body)

        # successful delete returns no body
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    #----------------
    # Routes
    #----------------
    def list_routes(self) -> List[Route]:
        data = self._request("GET", self._url("routes"))
        return [route_from_payload(item) for item in data or []]

    def create_route(self, route: Route) -> Route:
        """
        Any placeholder id on `route` is dropped; the store assigns the real one.
        """
        data = self._request("POST", self._url("routes"), route_to_payload(route))
        created = route_from_payload(data)
        logger.info("Route %s created", created.id)
        return created

    def update_route(self, route_id: str, fields: Dict[str, Any]) -> Route:
        """
        Partial update: only the supplied wire fields are replaced,
        e.g. update_route(id, {"color": "#FF0000"}).
        """
        data = self._request("PUT", self._url("routes", route_id), fields)
        return route_from_payload(data)

    def delete_route(self, route_id: str) -> None:
        self._request("DELETE", self._url("routes", route_id))
        logger.info("Route %s deleted", route_id)

    #----------------
    # Markers
    #----------------
    def list_markers(self) -> List[Marker]:
        data = self._request("GET", self._url("markers"))
        return [marker_from_payload(item) for item in data or []]

    def create_marker(self, marker: Marker) -> Marker:
        data = self._request("POST", self._url("markers"), marker_to_payload(marker))
        return marker_from_payload(data)

    def delete_marker(self, marker_id: str) -> None:
        self._request("DELETE", self._url("markers", marker_id))

    #----------------
    # Route-build session state
    #----------------
    def get_route_state(self, session_key: str) -> RouteState:
        data = self._request("GET", self._url("route-state", session_key))
        return route_state_from_payload(data, session_key=session_key)

    def put_route_state(self, state: RouteState) -> RouteState:
        data = self._request("PUT", self._url("route-state", state.session_key), route_state_to_payload(state))
        return route_state_from_payload(data, session_key=state.session_key)
