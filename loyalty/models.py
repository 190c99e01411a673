"""
Purpose: Loyalty program records.
Rule: Models only, accrual math lives in loyalty.accrual.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple

from orders.models import new_id


class Tier(str, Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


@dataclass(frozen=True)
class LoyaltyProgram:
    """
    One per user. points is the redeemable balance; historical_points only ever
    grows and decides the tier.
    """
    id: str
    user_id: str
    points: int = 0
    historical_points: int = 0
    tier: Tier = Tier.BRONZE
    rewards: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def new(cls, user_id: str) -> LoyaltyProgram:
        return cls(id=new_id(), user_id=user_id)
