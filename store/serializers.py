"""
Purpose: JSON <-> domain model conversion for the store API.
What it does:
- Writes payloads with the store's camelCase field names
  (overviewPath, routeStep, startLocation, ...).
- Reads records back, accepting "_id" as an alias for "id" and turning
  timestamps into datetimes.
- Never sends an identifier on create: the store assigns it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from routes.models import BuildStep, Marker, Point, Route, RouteColor, RouteState


def point_to_dict(point: Point) -> Dict[str, float]:
    return {"lat": point.lat, "lng": point.lng}


def point_from_dict(data: Dict[str, Any]) -> Point:
    return Point(lat=float(data["lat"]), lng=float(data["lng"]))


def _points_from(data: Optional[List[Dict[str, Any]]]) -> List[Point]:
    return [point_from_dict(item) for item in (data or [])]


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def record_id(data: Dict[str, Any]) -> Optional[str]:
    value = data.get("id", data.get("_id"))
    return str(value) if value is not None else None


def route_to_payload(route: Route) -> Dict[str, Any]:
    return {
        "start": point_to_dict(route.start),
        "end": point_to_dict(route.end),
        "waypoints": [point_to_dict(point) for point in route.waypoints],
        "overviewPath": [point_to_dict(point) for point in route.overview_path],
        "distance": route.distance,
        "duration": route.duration,
        "color": RouteColor.parse(route.color).value,
    }


def route_from_payload(data: Dict[str, Any]) -> Route:
    return Route(
        id=record_id(data),
        start=point_from_dict(data["start"]),
        end=point_from_dict(data["end"]),
        waypoints=_points_from(data.get("waypoints")),
        overview_path=_points_from(data.get("overviewPath")),
        distance=data.get("distance", ""),
        duration=data.get("duration", ""),
        color=RouteColor.parse(data["color"]),
        created_at=parse_timestamp(data.get("createdAt")),
        updated_at=parse_timestamp(data.get("updatedAt")),
    )


def marker_to_payload(marker: Marker) -> Dict[str, Any]:
    return {"position": point_to_dict(marker.position)}


def marker_from_payload(data: Dict[str, Any]) -> Marker:
    return Marker(
        id=record_id(data),
        position=point_from_dict(data["position"]),
        created_at=parse_timestamp(data.get("createdAt")),
        updated_at=parse_timestamp(data.get("updatedAt")),
    )


def route_state_to_payload(state: RouteState) -> Dict[str, Any]:
    return {
        "routeStep": state.step.value,
        "startLocation": point_to_dict(state.start_location) if state.start_location else None,
        "color": state.color.value if state.color else None,
    }


def route_state_from_payload(data: Dict[str, Any], session_key: Optional[str] = None) -> RouteState:
    start = data.get("startLocation")
    color = data.get("color")
    return RouteState(
        session_key=data.get("sessionKey") or session_key,
        step=BuildStep(data.get("routeStep", BuildStep.WAYPOINT.value)),
        # An empty {} is how an unset start has been stored historically
        start_location=point_from_dict(start) if start and "lat" in start else None,
        color=RouteColor.parse(color) if color else None,
        updated_at=parse_timestamp(data.get("updatedAt")),
    )
