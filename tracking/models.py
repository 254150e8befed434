"""
Purpose: Data models for live position tracking.
What it does:
- PositionSample: one fix pushed by the device geolocation source
- GeolocationErrorCode: reason codes on the geolocation error channel,
  each with the message shown to the user
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from routes.models import Point


class GeolocationErrorCode(str, Enum):
    TIMEOUT = "TIMEOUT"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value) -> GeolocationErrorCode:
        if isinstance(value, GeolocationErrorCode):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


GEOLOCATION_ERROR_PREFIX = "Unable to get your location. "

GEOLOCATION_ERROR_MESSAGES = {
    GeolocationErrorCode.TIMEOUT: "Location request timed out. Please check your GPS signal and try again.",
    GeolocationErrorCode.POSITION_UNAVAILABLE: "Location information is unavailable. Please check your device settings.",
    GeolocationErrorCode.PERMISSION_DENIED: "Location permission denied. Please enable location services in your browser settings.",
    GeolocationErrorCode.UNKNOWN: "An unknown error occurred. Please try again.",
}


def geolocation_error_message(code) -> str:
    return GEOLOCATION_ERROR_PREFIX + GEOLOCATION_ERROR_MESSAGES[GeolocationErrorCode.parse(code)]


@dataclass(frozen=True)
class PositionSample:
    lat: float
    lng: float
    timestamp: Optional[datetime] = None

    @property
    def point(self) -> Point:
        return Point(lat=self.lat, lng=self.lng)
