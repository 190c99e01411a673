from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyticsPolicy:
    """
    Reporting thresholds for restaurant analytics.
    """
    # A delivery is late when it lands more than this many minutes after the order was placed.
    late_after_minutes: float = 45.0

    def validate(self) -> None:
        if self.late_after_minutes <= 0:
            raise ValueError("late_after_minutes must be > 0")


def default_analytics_policy() -> AnalyticsPolicy:
    p = AnalyticsPolicy()
    p.validate()
    return p
