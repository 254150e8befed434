#Marks tracking as a package.
#Re-exports the recorder, the viewport and the sample/error types
#so callers import from tracking without knowing internal file names.
#No business logic.

from .models import GeolocationErrorCode, PositionSample, geolocation_error_message
from .policy import TrackingPolicy, default_tracking_policy
from .recorder import PathRecorder
from .viewport import MapViewport

__all__ = [
    "PositionSample",
    "GeolocationErrorCode",
    "geolocation_error_message",
    "TrackingPolicy",
    "default_tracking_policy",
    "PathRecorder",
    "MapViewport",
]
