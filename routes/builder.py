"""
Purpose: The route-construction workflow (the "one call" entry points the UI uses).
What it does:
- Owns one BuildSession and advances it on user actions:
    begin -> add_point (start) -> add_point ... -> finish -> [select colour] -> commit
- Turns a finished session into a CommitTicket tagged with the session
  generation, asks the directions provider for a path and, on success,
  hands the Route to the optimistic RouteCollection for creation.
- Discards any response whose ticket generation no longer matches
  (the user cancelled or restarted while the request was out).
- Mirrors every step into the store's route-state record when a store
  client is supplied, so another device can resume the build.

Rule: builder owns sequencing, validation lives in routes.validation,
HTTP lives in directions/ and store/.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from directions.models import DirectionsFailure, DirectionsResult, FailureKind
from store.client import StoreClient, StoreError
from store.collections import RouteCollection

from .build_state import (
    BuildPhase,
    BuildSession,
    BuildStateException,
    reset_to_idle,
    transition_point_added,
    transition_start_selected,
    transition_to_awaiting_color,
    transition_to_awaiting_start,
    transition_to_committing,
)
from .models import Point, Route, RouteColor
from .policy import BuilderPolicy, default_builder_policy
from .validation import (
    BuildValidationError,
    ValidationCode,
    check_not_duplicate,
    check_ready_to_finish,
    find_duplicate,
    VALIDATION_MESSAGES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitTicket:
    """
    Everything needed to request directions for one finished build.
    `generation` ties the eventual response back to the build that asked.
    """

    generation: int
    session_key: str
    start: Point
    end: Point
    color: RouteColor
    waypoints: List[Point] = field(default_factory=list)


class CommitStatus(Enum):
    SAVED = "SAVED"
    DUPLICATE = "DUPLICATE"
    DIRECTIONS_FAILED = "DIRECTIONS_FAILED"
    STORE_FAILED = "STORE_FAILED"
    STALE = "STALE"


@dataclass(frozen=True)
class CommitOutcome:
    status: CommitStatus
    ticket: CommitTicket
    route: Optional[Route] = None
    failure: Optional[DirectionsFailure] = None
    message: Optional[str] = None

    @property
    def saved(self) -> bool:
        return self.status == CommitStatus.SAVED


class RouteBuilder:
    """
    Route Builder state machine.

    Phases: IDLE -> AWAITING_START -> AWAITING_WAYPOINT_OR_END
            [-> AWAITING_COLOR] -> COMMITTING -> IDLE
    cancel() returns to IDLE from anywhere.
    """

    def __init__(self,
                 directions,
                 routes: RouteCollection,
                 *,
                 session_key: Optional[str] = None,
                 store: Optional[StoreClient] = None,
                 policy: Optional[BuilderPolicy] = None):
        self.directions = directions  # anything with route(origin, destination, waypoints, mode)
        self.routes = routes
        self.store = store  # only needed when the build should survive a reload
        self.policy = policy or default_builder_policy()
        self.session = BuildSession(
            session_key=session_key or uuid.uuid4().hex,
            color=self.policy.default_color,
        )

    # --- Read-only view ---

    @property
    def phase(self) -> BuildPhase:
        return self.session.phase

    @property
    def is_active(self) -> bool:
        return self.session.is_active

    @property
    def start(self) -> Optional[Point]:
        return self.session.start

    @property
    def points(self) -> List[Point]:
        return list(self.session.points)

    @property
    def color(self) -> RouteColor:
        return self.session.color

    # --- Session-state persistence ---

    def resume(self) -> BuildSession:
        """
        Load the stored route-state record for this session key (the store
        creates an empty one on first read) and continue from it.
        """
        if self.store is None:
            return self.session
        state = self.store.get_route_state(self.session.session_key)
        self.session = BuildSession.from_state(state, default_color=self.policy.default_color,
                                               generation=self.session.generation + 1)
        logger.info("Resumed build %s in %s", self.session.session_key, self.session.phase.value)
        return self.session

    def _sync_state(self) -> None:
        if self.store is None:
            return
        try:
            self.store.put_route_state(self.session.to_state())
        except StoreError as exc:
            # The build itself lives here; a failed mirror only loses resume.
            logger.warning("Could not store route state for %s: %s", self.session.session_key, exc)

    # --- Transitions ---

    def begin(self) -> None:
        """
        Idle -> AwaitingStart. Starting again while a build is open
        discards the open build first.
        """
        if self.session.is_active:
            reset_to_idle(self.session)
        transition_to_awaiting_start(self.session)
        logger.info("Build %s started (generation %d)", self.session.session_key, self.session.generation)
        self._sync_state()

    def add_point(self, point: Point) -> Optional[CommitTicket]:
        """
        Feed a map click or place-search result into the build.

        AwaitingStart: the point becomes the start.
        AwaitingWaypointOrEnd: the point is appended in order. In click-to-place
        mode the point that reaches `auto_finish_point_count` finishes the build
        and the ticket is returned; otherwise returns None.
        """
        if self.session.phase == BuildPhase.AWAITING_START:
            transition_start_selected(self.session, point)
            logger.info("Build %s start set to %s", self.session.session_key, point)
            self._sync_state()
            return None

        if self.session.phase != BuildPhase.AWAITING_WAYPOINT_OR_END:
            raise BuildStateException(f"Cannot add a point while {self.session.phase.value}")

        auto_finish = (
            not self.policy.explicit_finish_required
            and len(self.session.points) + 1 >= self.policy.auto_finish_point_count
        )
        if auto_finish:
            # reject the would-be end before it is recorded
            self._check_finishable(self.session.points + [point])

        transition_point_added(self.session, point)
        logger.info("Build %s point %d added: %s", self.session.session_key, len(self.session.points), point)

        if auto_finish:
            return self.finish()
        self._sync_state()
        return None

    def select_color(self, color) -> Optional[CommitTicket]:
        """
        Colour may be chosen at any time before commit. When the build is
        waiting for a colour confirmation this also finishes it.
        """
        if self.session.phase == BuildPhase.COMMITTING:
            raise BuildStateException("Colour cannot change while the route is being committed")

        self.session.color = RouteColor.parse(color)
        if self.session.phase == BuildPhase.AWAITING_COLOR:
            transition_to_committing(self.session)
            self._sync_state()
            return self._ticket()
        if self.session.is_active:
            self._sync_state()
        return None

    def finish(self) -> Optional[CommitTicket]:
        """
        "Finish route": validate locally, then move to COMMITTING and return
        the ticket to request directions with. Returns None when a colour
        confirmation is required first.

        Raises BuildValidationError without changing state when the build
        cannot finish yet.
        """
        if self.session.phase not in (BuildPhase.AWAITING_START, BuildPhase.AWAITING_WAYPOINT_OR_END):
            raise BuildStateException(f"Cannot finish a build that is {self.session.phase.value}")

        self._check_finishable(self.session.points)

        if self.policy.confirm_color_before_commit:
            transition_to_awaiting_color(self.session)
            self._sync_state()
            return None

        transition_to_committing(self.session)
        self._sync_state()
        return self._ticket()

    def cancel(self) -> None:
        """
        Any phase -> Idle. Tentative points are dropped and any response
        still in flight will be discarded.
        """
        was = self.session.phase
        reset_to_idle(self.session)
        logger.info("Build %s cancelled from %s", self.session.session_key, was.value)
        self._sync_state()

    # --- Commit ---

    def commit(self, ticket: CommitTicket) -> CommitOutcome:
        """
        Synchronous convenience: request directions for the ticket and apply them.
        """
        outcome = self.directions.route(
            ticket.start.as_tuple(),
            ticket.end.as_tuple(),
            [waypoint.as_tuple() for waypoint in ticket.waypoints],
            mode=self.policy.travel_mode,
        )
        return self.complete(ticket, outcome)

    def complete(self, ticket: CommitTicket, outcome) -> CommitOutcome:
        """
        Apply a directions response to the build that requested it.
        """
        if ticket.generation != self.session.generation or self.session.phase != BuildPhase.COMMITTING:
            logger.info("Discarding stale directions response for generation %d (current %d)",
                        ticket.generation, self.session.generation)
            return CommitOutcome(CommitStatus.STALE, ticket)

        if isinstance(outcome, DirectionsResult) and not outcome.overview_path:
            outcome = DirectionsFailure(FailureKind.NO_ROUTE)

        if isinstance(outcome, DirectionsFailure):
            logger.warning("Directions failed for build %s: %s", ticket.session_key, outcome.kind.value)
            self._finish_build()
            return CommitOutcome(CommitStatus.DIRECTIONS_FAILED, ticket, failure=outcome, message=outcome.message)

        route = Route(
            start=ticket.start,
            end=ticket.end,
            waypoints=list(ticket.waypoints),
            overview_path=[Point.from_tuple(coordinates) for coordinates in outcome.overview_path],
            distance=outcome.distance_text,
            duration=outcome.duration_text,
            color=ticket.color,
        )

        # routes may have been added while the request was out
        if self.policy.check_duplicates and find_duplicate(
                route.start, route.end, self.routes.all(), self.policy.duplicate_tolerance_deg):
            logger.info("Build %s rejected as duplicate", ticket.session_key)
            self._finish_build()
            return CommitOutcome(CommitStatus.DUPLICATE, ticket,
                                 message=VALIDATION_MESSAGES[ValidationCode.DUPLICATE_ROUTE])

        try:
            saved = self.routes.create(route)
        except StoreError as exc:
            logger.error("Saving route for build %s failed: %s", ticket.session_key, exc)
            self._finish_build()
            return CommitOutcome(CommitStatus.STORE_FAILED, ticket, route=route,
                                 message="Could not save the route. Please try again.")

        logger.info("Build %s saved as route %s", ticket.session_key, saved.id)
        self._finish_build()
        return CommitOutcome(CommitStatus.SAVED, ticket, route=saved, message="Route saved successfully!")

    # --- Internal ---

    def _check_finishable(self, points: List[Point]) -> None:
        check_ready_to_finish(self.session.start, points, self.policy.min_end_distance_m)
        if self.policy.check_duplicates:
            check_not_duplicate(self.session.start, points[-1],
                                self.routes.all(), self.policy.duplicate_tolerance_deg)

    def _ticket(self) -> CommitTicket:
        return CommitTicket(
            generation=self.session.generation,
            session_key=self.session.session_key,
            start=self.session.start,
            end=self.session.destination,
            color=self.session.color,
            waypoints=self.session.intermediate_waypoints,
        )

    def _finish_build(self) -> None:
        reset_to_idle(self.session)
        self._sync_state()


__all__ = [
    "RouteBuilder",
    "CommitTicket",
    "CommitOutcome",
    "CommitStatus",
    "BuildValidationError",
]
