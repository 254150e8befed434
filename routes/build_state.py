"""
Purpose: The route-build session and its legal transitions.
What it does:
- BuildSession holds everything a single in-progress build owns: phase,
  tentative start, the ordered points chosen after it, colour and the
  generation counter used to discard stale responses.
- transition_* functions move a session between phases and raise
  BuildStateException on anything else.
- to_state()/from_state() convert to and from the stored RouteState record.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .models import DEFAULT_COLOR, BuildStep, Point, RouteColor, RouteState


class BuildPhase(Enum):
    IDLE = "IDLE"
    AWAITING_START = "AWAITING_START"
    AWAITING_WAYPOINT_OR_END = "AWAITING_WAYPOINT_OR_END"
    AWAITING_COLOR = "AWAITING_COLOR"
    COMMITTING = "COMMITTING"


# Stored step for each phase. IDLE is stored as "waypoint" with no start,
# the same "empty" record the store creates on first read.
PHASE_STEPS = {
    BuildPhase.IDLE: BuildStep.WAYPOINT,
    BuildPhase.AWAITING_START: BuildStep.START,
    BuildPhase.AWAITING_WAYPOINT_OR_END: BuildStep.WAYPOINT,
    BuildPhase.AWAITING_COLOR: BuildStep.COLOR,
    BuildPhase.COMMITTING: BuildStep.END,
}


class BuildStateException(Exception):
    """Raised when an invalid build transition is attempted."""
    pass


@dataclass
class BuildSession:
    """
    Per-session build context. One builder owns one of these.
    """

    session_key: str
    phase: BuildPhase = BuildPhase.IDLE
    start: Optional[Point] = None

    # Points chosen after the start, in user-action order.
    # The last one is the destination, the ones before it are stopovers.
    points: List[Point] = field(default_factory=list)

    color: RouteColor = DEFAULT_COLOR
    generation: int = 0

    @property
    def step(self) -> BuildStep:
        return PHASE_STEPS[self.phase]

    @property
    def is_active(self) -> bool:
        return self.phase != BuildPhase.IDLE

    @property
    def destination(self) -> Optional[Point]:
        return self.points[-1] if self.points else None

    @property
    def intermediate_waypoints(self) -> List[Point]:
        return list(self.points[:-1])

    def to_state(self) -> RouteState:
        return RouteState(
            session_key=self.session_key,
            step=self.step,
            start_location=self.start,
            color=self.color,
        )

    @classmethod
    def from_state(cls, state: RouteState, default_color: RouteColor = DEFAULT_COLOR,
                   generation: int = 0) -> BuildSession:
        """
        Rebuild a session from a stored record. Only the start and colour are
        stored, so a resumed build continues from "pick the next point".
        A build stored mid-commit cannot resume its request and restarts from there too.
        `generation` must be above that of any ticket already issued for the session.
        """
        color = state.color or default_color
        if state.step == BuildStep.START:
            phase = BuildPhase.AWAITING_START
        elif state.start_location is not None:
            phase = BuildPhase.AWAITING_WAYPOINT_OR_END
        else:
            phase = BuildPhase.IDLE

        return cls(
            session_key=state.session_key,
            phase=phase,
            start=state.start_location if phase == BuildPhase.AWAITING_WAYPOINT_OR_END else None,
            color=color,
            generation=generation,
        )


def _require(session: BuildSession, *allowed: BuildPhase) -> None:
    if session.phase not in allowed:
        expected = ", ".join(phase.value for phase in allowed)
        raise BuildStateException(f"Build {session.session_key} is {session.phase.value}, expected {expected}")


def transition_to_awaiting_start(session: BuildSession) -> BuildSession:
    """
    Idle -> AwaitingStart. Clears any leftovers from a previous build.
    """
    _require(session, BuildPhase.IDLE)
    session.start = None
    session.points = []
    session.generation += 1
    session.phase = BuildPhase.AWAITING_START
    return session


def transition_start_selected(session: BuildSession, point: Point) -> BuildSession:
    _require(session, BuildPhase.AWAITING_START)
    session.start = point
    session.phase = BuildPhase.AWAITING_WAYPOINT_OR_END
    return session


def transition_point_added(session: BuildSession, point: Point) -> BuildSession:
    _require(session, BuildPhase.AWAITING_WAYPOINT_OR_END)
    session.points.append(point)
    return session


def transition_to_awaiting_color(session: BuildSession) -> BuildSession:
    _require(session, BuildPhase.AWAITING_WAYPOINT_OR_END)
    session.phase = BuildPhase.AWAITING_COLOR
    return session


def transition_to_committing(session: BuildSession) -> BuildSession:
    _require(session, BuildPhase.AWAITING_WAYPOINT_OR_END, BuildPhase.AWAITING_COLOR)
    session.phase = BuildPhase.COMMITTING
    return session


def reset_to_idle(session: BuildSession) -> BuildSession:
    """
    Finish or cancel from any phase: drop tentative data and invalidate
    every request still in flight by bumping the generation.
    The chosen colour is kept for the next build.
    """
    session.start = None
    session.points = []
    session.generation += 1
    session.phase = BuildPhase.IDLE
    return session
