"""
Purpose: Central configuration for batch dispatch (single source of truth).
What it does:

Stores the tunable caps for building a courier batch:

MAX_STOPS = None (unlimited)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BatchingPolicy:
    """
    Central configuration for batch dispatch.

    Notes:
    - max_stops caps how many locations one courier batch may visit.
      The route optimizer is O(n²) in stops, so keep it in the tens.
    - The route always starts at the first location (the depot) and never
      returns to it.
    """

    # --- Batch size caps ---
    max_stops: Optional[int] = None

    # --- Route metrics ---
    # Decimal places kept on BatchOrder.total_distance (kilometers). None keeps full precision.
    distance_precision: Optional[int] = None

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.max_stops is not None and self.max_stops < 1:
            raise ValueError("max_stops must be >= 1")

        if self.distance_precision is not None and self.distance_precision < 0:
            raise ValueError("distance_precision must be >= 0")


def default_batching_policy() -> BatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = BatchingPolicy()
    p.validate()
    return p


def peak_batching_policy() -> BatchingPolicy:
    """
    Tighter batches during lunch/dinner peaks to protect delivery times.
    """
    p = BatchingPolicy(max_stops=8)
    p.validate()
    return p
