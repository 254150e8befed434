#Marks directions as a package.
#Re-exports the public API (DirectionsClient, result/failure types, distance helper)
#so other modules import from directions without knowing internal file names.
#No business logic.

from .google_client import DirectionsClient
from .models import DirectionsFailure, DirectionsResult, FailureKind, FAILURE_MESSAGES, classify_status
from .geo import distance_m

__all__ = [
    "DirectionsClient",
    "DirectionsResult",
    "DirectionsFailure",
    "FailureKind",
    "FAILURE_MESSAGES",
    "classify_status",
    "distance_m",
]
