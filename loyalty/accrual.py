"""
Purpose: Loyalty accrual engine.
What it does:
- points earned for one order:
    floor(total_bill / 10) + 50 if total_bill > 100 + 100 if total_bill > 200
- adds them to the redeemable and the historical balance
- recomputes the tier from historical points (never downgrades)

Rule: Pure. The caller checks the order exists and persists the returned program.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from orders.models import Order

from .models import LoyaltyProgram, Tier
from .policy import LoyaltyPolicy, default_loyalty_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccrualResult:
    points_earned: int
    program: LoyaltyProgram


def calculate_points(total_bill, policy: Optional[LoyaltyPolicy] = None) -> int:
    policy = policy or default_loyalty_policy()
    total = Decimal(str(total_bill))

    points = math.floor(total / policy.points_divisor)
    for threshold, bonus in policy.bonuses:
        if total > threshold:
            points += bonus
    return points


def calculate_tier(historical_points: int, policy: Optional[LoyaltyPolicy] = None) -> Tier:
    policy = policy or default_loyalty_policy()
    for minimum, tier in policy.tier_thresholds:
        if historical_points >= minimum:
            return tier
    return Tier.BRONZE


def accrue(
    user_id: str,
    order: Order,
    program: Optional[LoyaltyProgram] = None,
    *,
    policy: Optional[LoyaltyPolicy] = None,
) -> AccrualResult:
    """
    Credit the points for `order` to the user's program, creating the program
    if the user has none yet.
    """
    policy = policy or default_loyalty_policy()
    program = program or LoyaltyProgram.new(user_id)

    points_earned = calculate_points(order.total_bill, policy)
    historical_points = program.historical_points + points_earned
    tier = calculate_tier(historical_points, policy)

    if tier != program.tier:
        logger.info("user %s moved from %s to %s", user_id, program.tier.value, tier.value)

    updated = replace(
        program,
        points=program.points + points_earned,
        historical_points=historical_points,
        tier=tier,
    )
    return AccrualResult(points_earned=points_earned, program=updated)
