"""
Purpose: Domain models for the Routes capability.
What it does:
- Defines core data structures:
- Point (lat, lng)
- Route (id, start, end, waypoints, overview_path, distance, duration, color, timestamps)
- Marker (id, position, timestamps)
- RouteState (the persisted route-build session record)

Defines enums/constants:
- RouteColor = BLUE | RED | GREEN | PURPLE | ORANGE (the fixed palette)
- BuildStep = start | waypoint | end | color

Rule: No HTTP calls, no workflow logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
import uuid

LatLng = Tuple[float, float]

# Identifiers handed out locally before the store has confirmed a create.
PLACEHOLDER_PREFIX = "local-"


class RouteColor(str, Enum):
    BLUE = "#0000FF"
    RED = "#FF0000"
    GREEN = "#00FF00"
    PURPLE = "#800080"
    ORANGE = "#FFA500"

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls, value) -> RouteColor:
        """
        Accepts a RouteColor, a hex value ("#ff0000") or a palette name ("red").
        """
        if isinstance(value, RouteColor):
            return value
        text = str(value).strip().upper()
        for color in cls:
            if text == color.value or text == color.name:
                return color
        raise ValueError(f"Unknown route color: {value!r}")


DEFAULT_COLOR = RouteColor.BLUE


class BuildStep(str, Enum):
    START = "start"
    WAYPOINT = "waypoint"
    END = "end"
    COLOR = "color"


@dataclass(frozen=True)
class Point:
    """
    A latitude/longitude pair in degrees. Range is not validated here;
    the directions provider rejects what it cannot route.
    """

    lat: float
    lng: float

    def as_tuple(self) -> LatLng:
        return (self.lat, self.lng)

    @classmethod
    def from_tuple(cls, coordinates: LatLng) -> Point:
        lat, lng = coordinates
        return cls(lat=float(lat), lng=float(lng))


@dataclass(frozen=True)
class Route:
    """
    A persisted (or about to be persisted) route.

    waypoints holds only the intermediate stops, in the order they were chosen.
    overview_path is the densified polyline from the directions provider and is
    not the same thing as start + waypoints + end.
    """

    start: Point
    end: Point
    overview_path: List[Point]
    distance: str
    duration: str
    color: RouteColor = DEFAULT_COLOR
    waypoints: List[Point] = field(default_factory=list)

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None and not is_placeholder_id(self.id)

    def with_color(self, color) -> Route:
        # Geometry and identity are carried over untouched
        return replace(self, color=RouteColor.parse(color))


@dataclass(frozen=True)
class Marker:
    """
    A single pinned position. Markers are never updated in place.
    """

    position: Point
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class RouteState:
    """
    Stored snapshot of an in-progress route build, one per session key.
    """

    session_key: str
    step: BuildStep = BuildStep.WAYPOINT
    start_location: Optional[Point] = None
    color: Optional[RouteColor] = None
    updated_at: Optional[datetime] = None


def new_placeholder_id() -> str:
    return f"{PLACEHOLDER_PREFIX}{uuid.uuid4()}"


def is_placeholder_id(value: Optional[str]) -> bool:
    return bool(value) and str(value).startswith(PLACEHOLDER_PREFIX)
