#Expose the map screen pieces:
#Notice board (transient success/error banners)
#MapController orchestrator (the "one call" entry point per UI event)

from .notices import Notice, NoticeBoard, NoticeLevel
from .controller import MapController

__all__ = [
    "Notice",
    "NoticeBoard",
    "NoticeLevel",
    "MapController",
]
