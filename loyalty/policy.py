"""
Purpose: Central configuration for loyalty accrual.

POINTS_DIVISOR = 10          (one point per 10 currency units)
BONUSES = >100: +50, >200: +100 (additive)
TIERS = >=5000 PLATINUM, >=2000 GOLD, >=500 SILVER, else BRONZE

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Tuple

from .models import Tier


@dataclass(frozen=True)
class LoyaltyPolicy:
    # --- Base accrual ---
    points_divisor: Decimal = Decimal("10")

    # --- Large order bonuses ---
    # (strictly-greater-than threshold, bonus points); every threshold passed adds its bonus
    bonuses: Tuple[Tuple[Decimal, int], ...] = field(
        default_factory=lambda: ((Decimal("100"), 50), (Decimal("200"), 100))
    )

    # --- Tiers ---
    # (minimum historical points, tier), highest threshold first
    tier_thresholds: Tuple[Tuple[int, Tier], ...] = field(
        default_factory=lambda: ((5000, Tier.PLATINUM), (2000, Tier.GOLD), (500, Tier.SILVER))
    )

    def validate(self) -> None:
        if self.points_divisor <= 0:
            raise ValueError("points_divisor must be > 0")

        for threshold, bonus in self.bonuses:
            if threshold < 0 or bonus < 0:
                raise ValueError("bonus thresholds and points must be >= 0")

        minimums = [minimum for minimum, _ in self.tier_thresholds]
        if minimums != sorted(minimums, reverse=True):
            raise ValueError("tier_thresholds must be ordered highest first")


def default_loyalty_policy() -> LoyaltyPolicy:
    """
    Convenience factory for the default policy.
    """
    p = LoyaltyPolicy()
    p.validate()
    return p
