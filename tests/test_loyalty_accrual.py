from dataclasses import replace
from decimal import Decimal

import pytest

from loyalty import LoyaltyPolicy, LoyaltyProgram, Tier, accrue, calculate_points, calculate_tier
from orders.models import Order


def make_order(total_bill) -> Order:
    return Order(id="o1", customer_id="c1", restaurant_id="r1", items=("m1",), total_bill=Decimal(str(total_bill)))


@pytest.mark.parametrize(
    "total_bill, points",
    [
        (0, 0),
        (9.99, 0),
        (99, 9),
        (100, 10),      # bonus needs strictly more than 100
        (100.01, 60),
        (200, 70),
        (250, 175),     # 25 + 50 + 100
    ],
)
def test_points_for_order_value(total_bill, points):
    assert calculate_points(total_bill) == points


@pytest.mark.parametrize(
    "historical, tier",
    [(0, Tier.BRONZE), (499, Tier.BRONZE), (500, Tier.SILVER), (1999, Tier.SILVER),
     (2000, Tier.GOLD), (5000, Tier.PLATINUM), (90000, Tier.PLATINUM)],
)
def test_tier_thresholds(historical, tier):
    assert calculate_tier(historical) is tier


def test_first_accrual_creates_a_bronze_program():
    result = accrue("u1", make_order(50))

    assert result.points_earned == 5
    assert result.program.user_id == "u1"
    assert result.program.points == 5
    assert result.program.historical_points == 5
    assert result.program.tier is Tier.BRONZE
    assert result.program.rewards == ()


def test_reaching_500_historical_points_promotes_to_silver_on_the_same_call():
    program = replace(LoyaltyProgram.new("u1"), points=100, historical_points=325)

    result = accrue("u1", make_order(250), program)

    assert result.program.historical_points == 500
    assert result.program.tier is Tier.SILVER


def test_accrual_does_not_mutate_the_input_program():
    program = LoyaltyProgram.new("u1")
    accrue("u1", make_order(250), program)
    assert program.points == 0


def test_redeemed_points_do_not_affect_tier():
    # balance was spent elsewhere, tier still follows historical points
    program = replace(LoyaltyProgram.new("u1"), points=0, historical_points=1990)

    result = accrue("u1", make_order(100), program)

    assert result.program.points == 10
    assert result.program.tier is Tier.GOLD


def test_custom_policy():
    policy = LoyaltyPolicy(points_divisor=Decimal("5"), bonuses=(), tier_thresholds=((10, Tier.GOLD),))
    result = accrue("u1", make_order(50), policy=policy)

    assert result.points_earned == 10
    assert result.program.tier is Tier.GOLD


def test_policy_validation():
    with pytest.raises(ValueError):
        LoyaltyPolicy(points_divisor=Decimal("0")).validate()
    with pytest.raises(ValueError):
        LoyaltyPolicy(tier_thresholds=((500, Tier.SILVER), (5000, Tier.PLATINUM))).validate()
