#Purpose: great-circle distance between two (lat, lng) points.
#Used by the builder's "end must be far enough from start" rule.
#Uses the same sphere radius as the Google Maps geometry library so
#distances agree with what the map shows.

import math
from typing import Tuple

LatLng = Tuple[float, float]

EARTH_RADIUS_M = 6378137.0


def distance_m(a: LatLng, b: LatLng) -> float:
    """
    Haversine distance in meters between two (lat, lng) pairs.
    """
    lat1, lng1 = math.radians(a[0]), math.radians(a[1])
    lat2, lng2 = math.radians(b[0]), math.radians(b[1])

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.asin(math.sqrt(h))
