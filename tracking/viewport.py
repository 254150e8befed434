"""
Purpose: The map centre, with timer-based coalescing of centre changes.
What it does:
- propose_center(): schedule a centre change; a newer proposal inside the
  debounce window replaces the pending one and restarts the window
- flush(): apply the pending centre once its window has elapsed
- center_on(): apply immediately (following the user, choosing a place)

The clock is injectable so the window can be driven from tests.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from routes.models import Point

logger = logging.getLogger(__name__)


class MapViewport:
    def __init__(self, center: Point, debounce_seconds: float = 0.1, clock: Callable[[], float] = time.monotonic):
        self.center = center
        self.debounce_seconds = debounce_seconds
        self.clock = clock

        self._pending: Optional[Point] = None
        self._due_at: Optional[float] = None

    @property
    def pending(self) -> Optional[Point]:
        return self._pending

    def propose_center(self, center: Point, now: Optional[float] = None) -> None:
        if center == self.center:
            return
        now = self.clock() if now is None else now
        self._pending = center
        self._due_at = now + self.debounce_seconds

    def flush(self, now: Optional[float] = None) -> bool:
        """
        Returns True when a pending centre was applied.
        """
        if self._pending is None:
            return False
        now = self.clock() if now is None else now
        if now < self._due_at:
            return False

        self.center = self._pending
        self._pending = None
        self._due_at = None
        logger.debug("Map centre moved to %s", self.center)
        return True

    def center_on(self, center: Point) -> None:
        self._pending = None
        self._due_at = None
        self.center = center
