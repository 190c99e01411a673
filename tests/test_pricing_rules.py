import datetime as dt
from dataclasses import replace
from decimal import Decimal

import pytest

from orders.errors import InvalidInput, InvalidRule
from pricing import (
    AdjustmentType,
    DemandCondition,
    PricingContext,
    PricingRule,
    SpecialEventCondition,
    TimeCondition,
    WeatherCondition,
    apply_rules,
    condition_from_record,
    condition_to_record,
)

RAIN = WeatherCondition("rain")
CONTEXT = PricingContext(
    time=dt.time(12, 30),
    demand_level=0.9,
    weather_condition="rain",
    active_event="cup-final",
)


def make_rule(adjustment_type, value, priority, condition=RAIN, created_at=None):
    rule = PricingRule.new("r1", condition, adjustment_type, value, priority)
    if created_at is not None:
        rule = replace(rule, created_at=created_at)
    return rule


def test_no_matching_rules_returns_base_price():
    rule = make_rule("percentage", 10, 1, condition=WeatherCondition("snow"))
    result = apply_rules(100, [rule], CONTEXT)

    assert result.price == Decimal("100")
    assert result.applied_rule_ids == []


def test_higher_priority_rule_is_applied_first():
    """
    fixed +5 (priority 2) then +10% (priority 1): (100 + 5) * 1.10
    """
    percentage = make_rule("percentage", 10, 1)
    fixed = make_rule("fixed", 5, 2)

    result = apply_rules(100, [percentage, fixed], CONTEXT)

    assert result.price == Decimal("115.5")
    assert result.applied_rule_ids == [fixed.id, percentage.id]


def test_swapping_priorities_changes_the_result():
    """
    +10% (priority 2) then fixed +5 (priority 1): 100 * 1.10 + 5
    """
    percentage = make_rule("percentage", 10, 2)
    fixed = make_rule("fixed", 5, 1)

    assert apply_rules(100, [fixed, percentage], CONTEXT).price == Decimal("115")


def test_price_is_clamped_at_zero():
    assert apply_rules(10, [make_rule("fixed", -100, 1)], CONTEXT).price == Decimal("0")


def test_clamping_happens_after_each_step():
    # -100 clamps to 0 before the +5 is added
    rules = [make_rule("fixed", -100, 2), make_rule("fixed", 5, 1)]
    assert apply_rules(10, rules, CONTEXT).price == Decimal("5")


def test_equal_priority_rules_apply_in_creation_order():
    earlier = make_rule("fixed", 10, 1, created_at=dt.datetime(2024, 1, 1, 12, 0))
    later = make_rule("percentage", 50, 1, created_at=dt.datetime(2024, 1, 1, 12, 5))

    # (100 + 10) * 1.5, whatever order the rules are passed in
    assert apply_rules(100, [later, earlier], CONTEXT).price == Decimal("165")
    assert apply_rules(100, [earlier, later], CONTEXT).price == Decimal("165")


@pytest.mark.parametrize(
    "condition, matches",
    [
        (TimeCondition(dt.time(11, 0), dt.time(14, 0)), True),
        (TimeCondition(dt.time(12, 30), dt.time(12, 30)), True),
        (TimeCondition(dt.time(18, 0), dt.time(21, 0)), False),
        (TimeCondition(dt.time(22, 0), dt.time(13, 0)), True),
        (DemandCondition(0.9), True),
        (DemandCondition(0.95), False),
        (WeatherCondition("rain"), True),
        (WeatherCondition("Rain"), False),
        (SpecialEventCondition("cup-final"), True),
        (SpecialEventCondition("marathon"), False),
    ],
)
def test_condition_matching(condition, matches):
    assert condition.matches(CONTEXT) is matches


def test_unset_context_fields_never_match():
    empty = PricingContext()
    assert not TimeCondition(dt.time(0, 0), dt.time(23, 59)).matches(empty)
    assert not DemandCondition(0).matches(empty)


def test_datetime_context_is_matched_on_time_of_day():
    context = PricingContext(time=dt.datetime(2024, 5, 1, 12, 0))
    assert TimeCondition(dt.time(11, 0), dt.time(13, 0)).matches(context)


def test_invalid_rules_are_skipped_and_reported():
    good = make_rule("fixed", 5, 1)
    unknown_condition = {
        "id": "bad-condition",
        "restaurant_id": "r1",
        "condition": {"type": "moon_phase", "parameters": {}},
        "adjustment_type": "fixed",
        "adjustment_value": 50,
        "priority": 9,
    }
    unknown_adjustment = PricingRule(
        id="bad-adjustment",
        restaurant_id="r1",
        condition=RAIN,
        adjustment_type="multiply",
        adjustment_value=Decimal("2"),
        priority=9,
    )

    result = apply_rules(100, [unknown_condition, good, unknown_adjustment], CONTEXT)

    assert result.price == Decimal("105")
    assert result.applied_rule_ids == [good.id]
    assert [d.rule_id for d in result.diagnostics] == ["bad-condition", "bad-adjustment"]


def test_valid_rule_records_are_accepted():
    record = {
        "restaurantId": "r1",
        "condition": {"type": "time", "parameters": {"startTime": "11:00", "endTime": 14}},
        "adjustmentType": "percentage",
        "adjustmentValue": 20,
        "priority": 1,
    }
    assert apply_rules(50, [record], CONTEXT).price == Decimal("60")


def test_negative_base_price_is_invalid_input():
    with pytest.raises(InvalidInput):
        apply_rules(-1, [], CONTEXT)


@pytest.mark.parametrize(
    "record",
    [
        {"type": "lunar"},
        {"type": "time", "parameters": {"startTime": "noon", "endTime": "13:00"}},
        {"type": "demand", "parameters": {}},
        {"type": "weather", "parameters": {"weatherCondition": ""}},
        {"type": "special_event"},
        None,
    ],
)
def test_condition_records_are_validated_at_construction(record):
    with pytest.raises(InvalidRule):
        condition_from_record(record)


def test_rule_construction_rejects_unknown_adjustment_type():
    with pytest.raises(InvalidRule):
        PricingRule.new("r1", RAIN, "multiply", 2, 1)
    assert PricingRule.new("r1", RAIN, "fixed", 2, 1).adjustment_type is AdjustmentType.FIXED


def test_epoch_millisecond_created_at_ties_with_a_built_rule():
    """
    createdAt as epoch milliseconds: 1700000000000 is 2023-11-14T22:13:20.
    """
    built = make_rule("fixed", 5, 1, created_at=dt.datetime(2024, 1, 1))
    stored = {
        "id": "stored",
        "restaurantId": "r1",
        "condition": {"type": "weather", "parameters": {"weatherCondition": "rain"}},
        "adjustmentType": "percentage",
        "adjustmentValue": 10,
        "priority": 1,
        "createdAt": 1700000000000,
    }

    result = apply_rules(100, [built, stored], CONTEXT)

    # the stored rule is older, so it goes first: 100 * 1.10 + 5
    assert result.price == Decimal("115")
    assert result.applied_rule_ids == ["stored", built.id]
    assert PricingRule.from_record(stored).created_at == dt.datetime(2023, 11, 14, 22, 13, 20)


def test_iso_created_at_is_accepted_and_bad_ones_are_reported():
    record = {
        "id": "iso",
        "restaurant_id": "r1",
        "condition": {"type": "weather", "weather_condition": "rain"},
        "adjustment_type": "fixed",
        "adjustment_value": 1,
        "priority": 1,
    }
    assert PricingRule.from_record({**record, "created_at": "2024-02-01T08:00:00Z"}).created_at == dt.datetime(
        2024, 2, 1, 8, 0
    )

    result = apply_rules(100, [{**record, "created_at": ["yesterday"]}], CONTEXT)

    assert result.price == Decimal("100")
    assert [d.rule_id for d in result.diagnostics] == ["iso"]


def test_directly_built_rule_with_float_value_is_converted():
    rule = PricingRule(
        id="float-value",
        restaurant_id="r1",
        condition=RAIN,
        adjustment_type="percentage",
        adjustment_value=10.0,
        priority=1,
    )

    result = apply_rules(100, [rule], CONTEXT)

    assert result.price == Decimal("110")
    assert result.applied_rule_ids == ["float-value"]


def test_directly_built_rule_with_bad_value_or_priority_is_skipped():
    no_value = PricingRule(
        id="no-value", restaurant_id="r1", condition=RAIN,
        adjustment_type="fixed", adjustment_value=None, priority=1,
    )
    float_priority = PricingRule(
        id="float-priority", restaurant_id="r1", condition=RAIN,
        adjustment_type="fixed", adjustment_value=Decimal("3"), priority=1.5,
    )

    result = apply_rules(100, [no_value, float_priority], CONTEXT)

    assert result.price == Decimal("100")
    assert [d.rule_id for d in result.diagnostics] == ["no-value", "float-priority"]


def test_equal_timestamps_fall_back_to_creation_order():
    created_at = dt.datetime(2024, 1, 1, 9, 0)
    first = replace(make_rule("fixed", 5, 1, created_at=created_at), id="zzz")
    second = replace(make_rule("percentage", 10, 1, created_at=created_at), id="aaa")

    result = apply_rules(100, [second, first], CONTEXT)

    # first-created goes first whatever the ids or input order: (100 + 5) * 1.10
    assert result.price == Decimal("115.5")
    assert result.applied_rule_ids == ["zzz", "aaa"]


def test_condition_records_round_trip():
    condition = TimeCondition(dt.time(22, 0), dt.time(2, 30))
    record = condition_to_record(condition)

    assert record == {"type": "time", "parameters": {"start_time": "22:00:00", "end_time": "02:30:00"}}
    assert condition_from_record(record) == condition
