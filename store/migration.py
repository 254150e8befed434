"""
Purpose: Move map data between browser-storage exports and the store.
What it does:
- Reads an export document {"routes": [...], "markers": [...]}.
- Upgrades old-format routes that still carry the provider's raw
  "directions" result into the stored shape (overviewPath + first-leg
  distance/duration text), defaulting missing colour and waypoints.
- Accepts markers either as bare {"lat", "lng"} positions or as
  {"position": {...}} records.
- Builds the same export document back from loaded routes and markers.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Tuple

from routes.models import DEFAULT_COLOR, Marker, Route

from .serializers import (
    marker_from_payload,
    point_from_dict,
    route_from_payload,
    route_to_payload,
    marker_to_payload,
)


def upgrade_legacy_route(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Old format kept the whole directions result; keep only what is drawn.
    """
    if "directions" not in data:
        upgraded = dict(data)
        upgraded["waypoints"] = data.get("waypoints") or []
        upgraded.setdefault("color", DEFAULT_COLOR.value)
        return upgraded

    first_route = data["directions"]["routes"][0]
    first_leg = (first_route.get("legs") or [{}])[0]
    return {
        "start": data["start"],
        "end": data["end"],
        "waypoints": data.get("waypoints") or [],
        "overviewPath": first_route.get("overview_path", []),
        "distance": (first_leg.get("distance") or {}).get("text", ""),
        "duration": (first_leg.get("duration") or {}).get("text", ""),
        "color": data.get("color") or DEFAULT_COLOR.value,
    }


def parse_export(document: Dict[str, Any]) -> Tuple[List[Route], List[Marker]]:
    routes = [route_from_payload(upgrade_legacy_route(item)) for item in document.get("routes", [])]

    markers: List[Marker] = []
    for item in document.get("markers", []):
        if "position" in item:
            markers.append(marker_from_payload(item))
        else:
            markers.append(Marker(position=point_from_dict(item)))

    # identifiers from another store are meaningless here
    routes = [_without_id(route) for route in routes]
    markers = [_without_id(marker) for marker in markers]
    return routes, markers


def build_export(routes: List[Route], markers: List[Marker]) -> Dict[str, Any]:
    exported_routes = []
    for route in routes:
        payload = route_to_payload(route)
        payload["id"] = route.id
        exported_routes.append(payload)

    exported_markers = []
    for marker in markers:
        payload = marker_to_payload(marker)
        payload["id"] = marker.id
        exported_markers.append(payload)

    return {"routes": exported_routes, "markers": exported_markers}


def _without_id(item):
    return replace(item, id=None, created_at=None, updated_at=None)
