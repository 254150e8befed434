"""
Purpose: Orchestrator for the map screen (the "glue").
What it does:
Receives user and device events (map click, place search, buttons, position
fixes) and routes each one to the part that owns it:
- route building -> routes.builder.RouteBuilder
- saved routes / markers -> store.collections (optimistic, with rollback)
- movement recording and map centre -> tracking
Every recoverable failure ends up as a transient notice instead of an exception.
"""

from __future__ import annotations

import logging
from typing import Optional

from routes.build_state import BuildPhase
from routes.builder import CommitOutcome, CommitTicket, RouteBuilder
from routes.models import Point, Route
from routes.validation import BuildValidationError
from store.client import StoreError
from store.collections import MarkerCollection, RouteCollection
from tracking.models import PositionSample
from tracking.recorder import PathRecorder
from tracking.viewport import MapViewport

from .notices import NoticeBoard

logger = logging.getLogger(__name__)

INVALID_PLACE_MESSAGE = "Please select a valid location"
UNKNOWN_COLOR_MESSAGE = "Please choose one of the route colours."
MISSING_ROUTE_MESSAGE = "That route no longer exists."

# phases in which a click or a search result is a point for the route
_POINT_PHASES = (BuildPhase.AWAITING_START, BuildPhase.AWAITING_WAYPOINT_OR_END)


class MapController:
    """
    One controller per open map. It holds the UI modes (adding a pin,
    selected route, pending delete) and nothing the collaborators already own.
    """

    def __init__(self,
                 builder: RouteBuilder,
                 routes: RouteCollection,
                 markers: MarkerCollection,
                 recorder: PathRecorder,
                 viewport: MapViewport,
                 notices: Optional[NoticeBoard] = None):
        self.builder = builder
        self.routes = routes
        self.markers = markers
        self.recorder = recorder
        self.viewport = viewport
        self.notices = notices or NoticeBoard()

        self.is_adding_pin = False
        self.selected_route_id: Optional[str] = None
        self.pending_delete_id: Optional[str] = None

    # --- Loading ---

    def load(self) -> bool:
        """
        Fetch routes, markers and any build left open in this session.
        """
        try:
            self.routes.load()
            self.markers.load()
            self.builder.resume()
        except StoreError as exc:
            logger.error("Loading map data failed: %s", exc)
            self.notices.error("Could not load saved routes and markers.")
            return False
        return True

    # --- Modes ---

    @property
    def is_adding_route(self) -> bool:
        return self.builder.is_active

    @property
    def selected_route(self) -> Optional[Route]:
        if self.selected_route_id is None:
            return None
        return self.routes.get(self.selected_route_id)

    def toggle_pin_mode(self) -> bool:
        self.is_adding_pin = not self.is_adding_pin
        return self.is_adding_pin

    def toggle_route_mode(self) -> bool:
        """
        "Add route" button: starts a build, or cancels the open one.
        """
        if self.builder.is_active:
            self.builder.cancel()
        else:
            self.is_adding_pin = False
            self.clear_selection()
            self.builder.begin()
        return self.builder.is_active

    # --- Map events ---

    def on_map_click(self, point: Optional[Point]) -> Optional[CommitOutcome]:
        """
        A click on the map surface. `point` is None when the click did not
        land on the map itself.
        """
        outcome = None
        if point is not None:
            if self.builder.phase in _POINT_PHASES:
                outcome = self._add_route_point(point)
            elif self.is_adding_pin:
                self._add_marker(point)
                self.is_adding_pin = False
        self.clear_selection()
        return outcome

    def on_place_selected(self, point: Optional[Point]) -> Optional[CommitOutcome]:
        """
        A result picked from the place search. Outside route building the
        place is pinned.
        """
        if point is None:
            self.notices.error(INVALID_PLACE_MESSAGE)
            return None

        outcome = None
        if self.builder.phase in _POINT_PHASES:
            outcome = self._add_route_point(point)
        else:
            self._add_marker(point)

        self.is_adding_pin = False
        self.recorder.set_following(False)
        self.viewport.center_on(point)
        return outcome

    def on_center_changed(self, center: Point) -> None:
        self.viewport.propose_center(center)

    def tick(self) -> None:
        """Timer callback: apply a debounced centre change that is due."""
        self.viewport.flush()

    # --- Route building ---

    def finish_route(self) -> Optional[CommitOutcome]:
        try:
            ticket = self.builder.finish()
        except BuildValidationError as exc:
            self.notices.error(exc.message)
            return None
        return self._commit(ticket)

    def select_color(self, color) -> Optional[CommitOutcome]:
        try:
            ticket = self.builder.select_color(color)
        except ValueError:
            self.notices.error(UNKNOWN_COLOR_MESSAGE)
            return None
        return self._commit(ticket)

    def cancel_route(self) -> None:
        self.builder.cancel()

    def _add_route_point(self, point: Point) -> Optional[CommitOutcome]:
        try:
            ticket = self.builder.add_point(point)
        except BuildValidationError as exc:
            self.notices.error(exc.message)
            return None
        return self._commit(ticket)

    def _commit(self, ticket: Optional[CommitTicket]) -> Optional[CommitOutcome]:
        if ticket is None:
            return None
        outcome = self.builder.commit(ticket)
        if outcome.saved:
            self.notices.success(outcome.message)
        elif outcome.message:
            self.notices.error(outcome.message)
        return outcome

    # --- Saved routes ---

    def select_route(self, route_id: str) -> Optional[Route]:
        if self.builder.is_active or self.routes.get(route_id) is None:
            return None
        self.selected_route_id = route_id
        self.pending_delete_id = None
        return self.selected_route

    def clear_selection(self) -> None:
        self.selected_route_id = None
        self.pending_delete_id = None

    def change_route_color(self, color) -> Optional[Route]:
        route_id = self.selected_route_id
        if route_id is None:
            return None
        if self.routes.get(route_id) is None:
            # refreshed or deleted elsewhere since it was selected
            self.clear_selection()
            self.notices.error(MISSING_ROUTE_MESSAGE)
            return None
        try:
            updated = self.routes.update_color(route_id, color)
        except ValueError:
            self.notices.error(UNKNOWN_COLOR_MESSAGE)
            return None
        except StoreError as exc:
            logger.error("Recolouring route %s failed: %s", route_id, exc)
            self.notices.error("Could not change the route colour. Please try again.")
            return None
        finally:
            self.clear_selection()
        return updated

    def request_delete(self, route_id: Optional[str] = None) -> Optional[str]:
        """
        First step of deleting a route: remember what to delete and wait
        for confirmation.
        """
        self.pending_delete_id = route_id or self.selected_route_id
        return self.pending_delete_id

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        route_id = self.pending_delete_id
        if route_id is None:
            return False
        try:
            self.routes.delete(route_id)
        except StoreError as exc:
            logger.error("Deleting route %s failed: %s", route_id, exc)
            self.notices.error("Could not delete the route. Please try again.")
            return False
        finally:
            self.clear_selection()
        return True

    # --- Markers ---

    def delete_marker(self, marker_id: str) -> bool:
        try:
            self.markers.delete(marker_id)
        except StoreError as exc:
            logger.error("Deleting marker %s failed: %s", marker_id, exc)
            self.notices.error("Could not delete the pin. Please try again.")
            return False
        return True

    def _add_marker(self, point: Point) -> None:
        try:
            self.markers.create(point)
        except StoreError as exc:
            logger.error("Saving marker at %s failed: %s", point, exc)
            self.notices.error("Could not save the pin. Please try again.")

    # --- Tracking ---

    def toggle_recording(self) -> bool:
        return self.recorder.toggle_recording()

    def toggle_following(self) -> bool:
        self.recorder.set_following(not self.recorder.is_following)
        return self.recorder.is_following

    def on_position(self, sample: PositionSample) -> None:
        self.recorder.on_position(sample)

    def on_position_error(self, code) -> None:
        message = self.recorder.on_error(code)
        if message:
            self.notices.error(message)
