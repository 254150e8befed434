#Purpose: The directions provider "adapter/client".
#Sole responsibility: talk to the Google Directions web service via HTTP and return normalized outputs.
#Encapsulates provider-specific details:
#coordinate formatting ("lat,lng", waypoints joined by "|")
#URL construction (/directions/json)
#status code classification
#decoding the encoded overview polyline into (lat, lng) points
#It should not contain route-building rules or duplicate checks.


from dotenv import load_dotenv
import logging
import os
from typing import List, Optional, Sequence, Tuple, Union

import polyline
import requests

from .models import DirectionsFailure, DirectionsResult, FailureKind, classify_status

# Read provider settings from environment
# Example in .env:
# DIRECTIONS_API_KEY=AIza...
# DIRECTIONS_BASE_URL=https://maps.googleapis.com/maps/api
load_dotenv()
DIRECTIONS_BASE_URL = os.getenv("DIRECTIONS_BASE_URL", "https://maps.googleapis.com/maps/api")
DIRECTIONS_API_KEY = os.getenv("DIRECTIONS_API_KEY")

logger = logging.getLogger(__name__)

# Internal coordinate type: (lat, lng)
LatLng = Tuple[float, float]

DirectionsOutcome = Union[DirectionsResult, DirectionsFailure]


class DirectionsClient:
    """
    Directions Adapter / Client

    Sole responsibility:
    - Talk to the provider via HTTP
    - Convert internal (lat, lng) -> provider "lat,lng"
    - Return a DirectionsResult or a typed DirectionsFailure (never retries)
    """

    def __init__(self, api_key: Optional[str] = None, timeout: int = 10, session=None):
        self.base_url = DIRECTIONS_BASE_URL.rstrip("/")
        self.api_key = api_key or DIRECTIONS_API_KEY
        self.timeout = timeout  # how long to wait for the provider before giving up
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError("Directions API key not set. Please set DIRECTIONS_API_KEY in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinate(self, coordinate: LatLng) -> str:
        """Convert (lat, lng) to the provider's 'lat,lng'."""
        lat, lng = coordinate
        return f"{lat},{lng}"

    def format_waypoints(self, waypoints: Sequence[LatLng]) -> str:
        """Stopover waypoints in visiting order: 'lat,lng|lat,lng|...'"""
        return "|".join(self.format_coordinate(waypoint) for waypoint in waypoints)

    #----------------
    # Public methods
    #----------------
    def route(self,
              origin: LatLng,
              destination: LatLng,
              waypoints: Sequence[LatLng] = (),
              mode: str = "driving",
              ) -> DirectionsOutcome:
        """
        Calls the /directions/json endpoint from origin to destination via the
        ordered waypoints.

        Returns:
            DirectionsResult(
                overview_path=[(lat, lng), ...],   # decoded overview polyline of the first route
                distance_text="12.3 km",           # first leg, as displayed by the provider
                duration_text="15 mins",
            )
            or DirectionsFailure(kind=FailureKind..., provider_status="ZERO_RESULTS")
        """
        params = {
            "origin": self.format_coordinate(origin),
            "destination": self.format_coordinate(destination),
            "mode": mode,
            "key": self.api_key,
        }
        if waypoints:
            params["waypoints"] = self.format_waypoints(waypoints)

        url = f"{self.base_url}/directions/json"
        logger.info("Requesting %s directions %s -> %s with %d waypoints",
                    mode, params["origin"], params["destination"], len(waypoints))

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Directions request failed: %s", exc)
            return DirectionsFailure(FailureKind.UNKNOWN, detail=str(exc))

        return self.parse_response(data)

    def parse_response(self, data: dict) -> DirectionsOutcome:
        """
        Normalize a provider JSON payload.
        """
        status = data.get("status")
        if status != "OK":
            kind = classify_status(status)
            logger.warning("Directions provider returned %s (%s)", status, data.get("error_message", ""))
            return DirectionsFailure(kind, provider_status=status, detail=data.get("error_message"))

        routes = data.get("routes") or []
        if not routes:
            return DirectionsFailure(FailureKind.NO_ROUTE, provider_status=status)

        route = routes[0]  # take the first route (the provider may return alternatives)
        encoded = (route.get("overview_polyline") or {}).get("points", "")
        overview_path: List[LatLng] = [(float(lat), float(lng)) for lat, lng in polyline.decode(encoded)] if encoded else []

        if not overview_path:
            return DirectionsFailure(FailureKind.NO_ROUTE, provider_status=status)

        legs = route.get("legs") or [{}]
        first_leg = legs[0]

        #Normalize output to internal format
        return DirectionsResult(
            overview_path=overview_path,
            distance_text=(first_leg.get("distance") or {}).get("text", ""),
            duration_text=(first_leg.get("duration") or {}).get("text", ""),
        )
