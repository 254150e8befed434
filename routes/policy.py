"""
Purpose: Central configuration for the route builder (single source of truth).
What it does:

Stores all tunable switches/thresholds for building a route:

EXPLICIT_FINISH_REQUIRED = True

DUPLICATE_TOLERANCE_DEG = 1e-6

MIN_END_DISTANCE_M = 100

Defines a BuilderPolicy object so you can pass policy explicitly.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import DEFAULT_COLOR, RouteColor


@dataclass(frozen=True)
class BuilderPolicy:
    """
    Central configuration for the route-construction workflow.

    Notes:
    - 'explicit finish' means the user presses "finish route" and the last
      chosen point becomes the destination. With it switched off the builder
      finishes on its own once `auto_finish_point_count` points have been
      chosen after the start (the click-to-place behaviour).
    - duplicate detection only compares start and end, never the waypoints.
    """

    # --- Commit trigger ---
    explicit_finish_required: bool = True

    # Only used when explicit_finish_required is False.
    # 1 = the first point after the start is the end (two-point routes).
    auto_finish_point_count: int = 1

    # --- Colour ---
    default_color: RouteColor = DEFAULT_COLOR

    # Ask for a colour between "finish" and the directions request.
    confirm_color_before_commit: bool = False

    # --- Local validation ---
    check_duplicates: bool = True
    duplicate_tolerance_deg: float = 1e-6

    # The end point must be at least this far (great-circle) from the start.
    min_end_distance_m: float = 100.0

    # --- Directions request ---
    travel_mode: str = "driving"

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.auto_finish_point_count < 1:
            raise ValueError("auto_finish_point_count must be >= 1")

        if self.duplicate_tolerance_deg <= 0:
            raise ValueError("duplicate_tolerance_deg must be > 0")

        if self.min_end_distance_m < 0:
            raise ValueError("min_end_distance_m must be >= 0")

        if not isinstance(self.default_color, RouteColor):
            raise ValueError("default_color must be one of the palette colours")


def default_builder_policy() -> BuilderPolicy:
    """
    Convenience factory for the default policy (explicit finish).
    """
    p = BuilderPolicy()
    p.validate()
    return p


def click_to_place_policy(points_after_start: int = 1) -> BuilderPolicy:
    """
    Variant where the route is committed as soon as enough points follow the start.
    """
    p = BuilderPolicy(
        explicit_finish_required=False,
        auto_finish_point_count=points_after_start,
    )
    p.validate()
    return p
