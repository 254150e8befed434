"""
Purpose: Record the device's movement as an ordered path.
What it does:
- Accepts position samples in arrival order from the geolocation source.
- While recording, appends each sample to the path; starting a new
  recording clears the previous path.
- While following, re-centres the viewport on each sample.
- Maps geolocation errors to user-facing messages. An error while
  following turns following off, since the map can no longer track.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from routes.models import Point

from .models import GeolocationErrorCode, PositionSample, geolocation_error_message
from .viewport import MapViewport

logger = logging.getLogger(__name__)


class PathRecorder:
    def __init__(self, viewport: Optional[MapViewport] = None):
        self.viewport = viewport
        self.is_recording = False
        self.is_following = False
        self.current_location: Optional[Point] = None
        self._path: List[Point] = []

    @property
    def path(self) -> List[Point]:
        return list(self._path)

    def start_recording(self) -> None:
        self._path = []
        self.is_recording = True
        logger.info("Recording started")

    def stop_recording(self) -> List[Point]:
        self.is_recording = False
        logger.info("Recording stopped with %d points", len(self._path))
        return self.path

    def toggle_recording(self) -> bool:
        if self.is_recording:
            self.stop_recording()
        else:
            self.start_recording()
        return self.is_recording

    def set_following(self, following: bool) -> None:
        self.is_following = following
        # jump straight to the last known fix rather than waiting for the next one
        if following and self.current_location is not None and self.viewport is not None:
            self.viewport.center_on(self.current_location)

    def on_position(self, sample: PositionSample) -> None:
        point = sample.point
        self.current_location = point
        if self.is_recording:
            self._path.append(point)
        if self.is_following and self.viewport is not None:
            self.viewport.center_on(point)

    def on_error(self, code) -> Optional[str]:
        """
        Returns the message to show, or None when the error needs no notice
        (nothing on screen depends on the fix unless following).
        """
        code = GeolocationErrorCode.parse(code)
        logger.warning("Geolocation error: %s", code.value)
        if not self.is_following:
            return None
        self.is_following = False
        return geolocation_error_message(code)
