"""
Purpose: Local rule gates for a route build (no network).
What it does:
- Duplicate detection: two routes are duplicates when start and end both
  match within a tolerance (waypoints are not compared).
- Finish readiness: a start must exist, at least one point must follow it,
  and the end must be far enough from the start.

Every failure is a BuildValidationError carrying a stable code and the
human-readable message shown to the user.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence

from directions.geo import distance_m

from .models import Point, Route


class ValidationCode(str, Enum):
    DUPLICATE_ROUTE = "DUPLICATE_ROUTE"
    MISSING_START = "MISSING_START"
    NEED_MORE_POINTS = "NEED_MORE_POINTS"
    END_TOO_CLOSE = "END_TOO_CLOSE"


VALIDATION_MESSAGES = {
    ValidationCode.DUPLICATE_ROUTE: "This route already exists.",
    ValidationCode.MISSING_START: "Select a start location first.",
    ValidationCode.NEED_MORE_POINTS: "Need at least one more point to finish the route.",
    ValidationCode.END_TOO_CLOSE: "End location must be at least {min_distance:.0f} meters away from start location",
}


class BuildValidationError(Exception):
    """Raised when a build is rejected locally, before any network call."""

    def __init__(self, code: ValidationCode, message: Optional[str] = None):
        self.code = code
        self.message = message or VALIDATION_MESSAGES[code]
        super().__init__(self.message)


def points_match(a: Point, b: Point, tolerance: float) -> bool:
    return abs(a.lat - b.lat) < tolerance and abs(a.lng - b.lng) < tolerance


def find_duplicate(start: Point, end: Point, routes: Iterable[Route], tolerance: float) -> Optional[Route]:
    """
    First loaded route with the same start and end, or None.
    """
    for route in routes:
        if points_match(route.start, start, tolerance) and points_match(route.end, end, tolerance):
            return route
    return None


def check_not_duplicate(start: Point, end: Point, routes: Iterable[Route], tolerance: float) -> None:
    existing = find_duplicate(start, end, routes, tolerance)
    if existing is not None:
        raise BuildValidationError(ValidationCode.DUPLICATE_ROUTE)


def check_end_distance(start: Point, end: Point, min_distance_m: float) -> None:
    if min_distance_m <= 0:
        return
    if distance_m(start.as_tuple(), end.as_tuple()) < min_distance_m:
        raise BuildValidationError(
            ValidationCode.END_TOO_CLOSE,
            VALIDATION_MESSAGES[ValidationCode.END_TOO_CLOSE].format(min_distance=min_distance_m),
        )


def check_ready_to_finish(start: Optional[Point], points: Sequence[Point], min_distance_m: float) -> None:
    """
    Gate for "finish route": start chosen, at least one point after it,
    and the last point (the destination) not too close to the start.
    """
    if start is None:
        raise BuildValidationError(ValidationCode.MISSING_START)
    if not points:
        raise BuildValidationError(ValidationCode.NEED_MORE_POINTS)
    check_end_distance(start, points[-1], min_distance_m)
