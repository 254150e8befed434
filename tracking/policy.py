"""
Purpose: Central configuration for position tracking.
What it does:

Stores the knobs handed to the geolocation source and the viewport:

CENTER_DEBOUNCE_SECONDS = 0.1
ENABLE_HIGH_ACCURACY = False
TIMEOUT_MS = 30000
MAXIMUM_AGE_MS = 60000

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class TrackingPolicy:
    """
    Central configuration for the recorder and the map centre.
    """

    # --- Map centre ---
    # Centre changes inside this window are coalesced; only the latest is applied.
    center_debounce_seconds: float = 0.1

    # --- Geolocation watch options ---
    # Low accuracy and a cached fix up to a minute old keep the watch from
    # timing out indoors.
    enable_high_accuracy: bool = False
    timeout_ms: int = 30000
    maximum_age_ms: int = 60000

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.center_debounce_seconds < 0:
            raise ValueError("center_debounce_seconds must be >= 0")

        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")

        if self.maximum_age_ms < 0:
            raise ValueError("maximum_age_ms must be >= 0")

    def watch_options(self) -> Dict[str, object]:
        """Options in the shape the browser geolocation watch expects."""
        return {
            "enableHighAccuracy": self.enable_high_accuracy,
            "timeout": self.timeout_ms,
            "maximumAge": self.maximum_age_ms,
        }


def default_tracking_policy() -> TrackingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = TrackingPolicy()
    p.validate()
    return p
