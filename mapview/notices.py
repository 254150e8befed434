"""
Purpose: Transient user-visible notices (success / error banners).
What it does:
- post(): show a message; success notices clear after 3 s, errors after 5 s
- active(): the notices still on screen at `now`
- latest(level): the newest live notice of a level

The clock is injectable so expiry can be driven from tests.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


DEFAULT_LIFETIMES: Dict[NoticeLevel, float] = {
    NoticeLevel.SUCCESS: 3.0,
    NoticeLevel.ERROR: 5.0,
}


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str
    posted_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class NoticeBoard:
    def __init__(self, clock: Callable[[], float] = time.monotonic, lifetimes: Optional[Dict[NoticeLevel, float]] = None):
        self.clock = clock
        self.lifetimes = dict(DEFAULT_LIFETIMES)
        if lifetimes:
            self.lifetimes.update(lifetimes)
        self._notices: List[Notice] = []

    def post(self, level: NoticeLevel, message: str) -> Notice:
        now = self.clock()
        notice = Notice(level=level, message=message, posted_at=now, expires_at=now + self.lifetimes[level])
        # one banner per level, a newer message replaces the old one
        self._notices = [item for item in self._notices if item.level != level]
        self._notices.append(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.post(NoticeLevel.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.post(NoticeLevel.ERROR, message)

    def active(self, now: Optional[float] = None) -> List[Notice]:
        now = self.clock() if now is None else now
        self._notices = [item for item in self._notices if item.is_live(now)]
        return list(self._notices)

    def latest(self, level: NoticeLevel, now: Optional[float] = None) -> Optional[Notice]:
        for notice in reversed(self.active(now)):
            if notice.level == level:
                return notice
        return None

    def clear(self, level: Optional[NoticeLevel] = None) -> None:
        if level is None:
            self._notices = []
        else:
            self._notices = [item for item in self._notices if item.level != level]
