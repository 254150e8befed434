"""
Purpose: Normalized outputs of the directions provider.
What it does:
- DirectionsResult: the drawable path plus the provider's distance/duration text
- DirectionsFailure: a typed failure, one FailureKind per provider status class
- classify_status(): provider status string -> FailureKind

Rule: no HTTP here, the client builds these.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

LatLng = Tuple[float, float]


class FailureKind(str, Enum):
    NO_ROUTE = "NO_ROUTE"
    REQUEST_DENIED = "REQUEST_DENIED"
    OVER_LIMIT = "OVER_LIMIT"
    INVALID_REQUEST = "INVALID_REQUEST"
    TOO_MANY_WAYPOINTS = "TOO_MANY_WAYPOINTS"
    UNKNOWN = "UNKNOWN"


FAILURE_MESSAGES = {
    FailureKind.NO_ROUTE: "No route found between these locations. Please try different start and end points.",
    FailureKind.REQUEST_DENIED: "Directions API is not enabled. Please enable it in the Google Cloud Console.",
    FailureKind.OVER_LIMIT: "Query limit exceeded. Please try again later.",
    FailureKind.INVALID_REQUEST: "Invalid route request. Please check your start and end locations.",
    FailureKind.TOO_MANY_WAYPOINTS: "Too many waypoints. Please reduce the number of stops.",
    FailureKind.UNKNOWN: "Error calculating route",
}

# Google Directions status codes
_STATUS_TO_KIND = {
    "ZERO_RESULTS": FailureKind.NO_ROUTE,
    "NOT_FOUND": FailureKind.NO_ROUTE,
    "REQUEST_DENIED": FailureKind.REQUEST_DENIED,
    "OVER_QUERY_LIMIT": FailureKind.OVER_LIMIT,
    "OVER_DAILY_LIMIT": FailureKind.OVER_LIMIT,
    "INVALID_REQUEST": FailureKind.INVALID_REQUEST,
    "MAX_WAYPOINTS_EXCEEDED": FailureKind.TOO_MANY_WAYPOINTS,
}


def classify_status(status: Optional[str]) -> FailureKind:
    return _STATUS_TO_KIND.get((status or "").upper(), FailureKind.UNKNOWN)


@dataclass(frozen=True)
class DirectionsResult:
    """
    First route, first leg, taken verbatim from the provider.
    """

    overview_path: List[LatLng]
    distance_text: str
    duration_text: str


@dataclass(frozen=True)
class DirectionsFailure:
    kind: FailureKind
    provider_status: Optional[str] = None
    detail: Optional[str] = field(default=None, compare=False)

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self.kind]
