"""
Purpose: Domain models for dynamic pricing.
What it does:
- PricingContext: the moment being priced (time of day, demand, weather, event)
- Conditions: closed set of matching predicates, one class per kind
    time | demand | weather | special_event
- PricingRule: condition + adjustment (percentage | fixed) + priority

Conditions are validated when a rule is built (from_record), so an unknown
kind or a missing parameter fails with InvalidRule before it is stored.
"""
from __future__ import annotations

import datetime as dt
import itertools
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from numbers import Real
from typing import Any, Mapping, Optional, Union

from orders.errors import InvalidRule
from orders.models import new_id

# creation order of rules built in this process; breaks created_at ties
_RULE_SEQUENCE = itertools.count(1)


class ConditionType(str, Enum):
    TIME = "time"
    DEMAND = "demand"
    WEATHER = "weather"
    SPECIAL_EVENT = "special_event"


class AdjustmentType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class PricingContext:
    """
    What the evaluator matches rule conditions against.
    A field left as None never matches a condition of that kind.
    """
    time: Optional[dt.time] = None
    demand_level: Optional[float] = None
    weather_condition: Optional[str] = None
    active_event: Optional[str] = None

    def time_of_day(self) -> Optional[dt.time]:
        if isinstance(self.time, dt.datetime):
            return self.time.time()
        return self.time


@dataclass(frozen=True)
class TimeCondition:
    """
    Matches when the context time falls within [start_time, end_time], inclusive.
    A window whose start is after its end wraps midnight (e.g. 22:00-02:00).
    """
    start_time: dt.time
    end_time: dt.time
    kind = ConditionType.TIME

    def matches(self, context: PricingContext) -> bool:
        now = context.time_of_day()
        if now is None:
            return False
        if self.start_time <= self.end_time:
            return self.start_time <= now <= self.end_time
        return now >= self.start_time or now <= self.end_time


@dataclass(frozen=True)
class DemandCondition:
    demand_threshold: float
    kind = ConditionType.DEMAND

    def matches(self, context: PricingContext) -> bool:
        if context.demand_level is None:
            return False
        return context.demand_level >= self.demand_threshold


@dataclass(frozen=True)
class WeatherCondition:
    weather_condition: str
    kind = ConditionType.WEATHER

    def matches(self, context: PricingContext) -> bool:
        return context.weather_condition == self.weather_condition


@dataclass(frozen=True)
class SpecialEventCondition:
    event_name: str
    kind = ConditionType.SPECIAL_EVENT

    def matches(self, context: PricingContext) -> bool:
        return context.active_event == self.event_name


Condition = Union[TimeCondition, DemandCondition, WeatherCondition, SpecialEventCondition]
CONDITION_CLASSES = (TimeCondition, DemandCondition, WeatherCondition, SpecialEventCondition)


@dataclass(frozen=True)
class PricingRule:
    """
    One independent pricing rule of a restaurant. Higher priority is applied first.
    """
    id: str
    restaurant_id: str
    condition: Condition
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    priority: int
    created_at: dt.datetime = field(default_factory=dt.datetime.utcnow)
    sequence: int = field(default_factory=lambda: next(_RULE_SEQUENCE))

    @classmethod
    def new(
        cls,
        restaurant_id: str,
        condition: Condition,
        adjustment_type: str | AdjustmentType,
        adjustment_value,
        priority: int,
    ) -> PricingRule:
        return cls(
            id=new_id(),
            restaurant_id=restaurant_id,
            condition=condition,
            adjustment_type=parse_adjustment_type(adjustment_type),
            adjustment_value=parse_decimal(adjustment_value, "adjustment_value"),
            priority=parse_priority(priority),
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> PricingRule:
        """
        Build a rule from a free-form mapping (request payload or stored record).
        Accepts snake_case or camelCase keys.
        """
        restaurant_id = _pick(record, "restaurant_id", "restaurantId")
        if not restaurant_id:
            raise InvalidRule("pricing rule needs a restaurant id", rule_id=record.get("id"))

        try:
            return cls(
                id=record.get("id") or new_id(),
                restaurant_id=restaurant_id,
                condition=condition_from_record(record.get("condition")),
                adjustment_type=parse_adjustment_type(_pick(record, "adjustment_type", "adjustmentType")),
                adjustment_value=parse_decimal(_pick(record, "adjustment_value", "adjustmentValue"), "adjustment_value"),
                priority=parse_priority(record.get("priority")),
                created_at=parse_created_at(_pick(record, "created_at", "createdAt")),
            )
        except InvalidRule as exc:
            if exc.rule_id is None:
                exc.rule_id = record.get("id")
            raise


def condition_to_record(condition: Condition) -> dict:
    """
    Inverse of condition_from_record; times become "HH:MM:SS" strings.
    """
    parameters = {
        name: value.isoformat() if isinstance(value, dt.time) else value
        for name, value in vars(condition).items()
    }
    return {"type": condition.kind.value, "parameters": parameters}


def parse_adjustment_type(value) -> AdjustmentType:
    try:
        return AdjustmentType(value)
    except ValueError:
        raise InvalidRule(f"unknown adjustment type {value!r}") from None


def condition_from_record(record: Optional[Mapping[str, Any]]) -> Condition:
    """
    Build a typed condition from {"type": ..., "parameters": {...}}.
    Parameters may also sit at the top level of the mapping.
    """
    if not isinstance(record, Mapping):
        raise InvalidRule("condition must be a mapping with a 'type'")

    kind = record.get("type")
    params = record.get("parameters") or record

    try:
        kind = ConditionType(kind)
    except ValueError:
        raise InvalidRule(f"unknown condition type {kind!r}") from None

    if kind == ConditionType.TIME:
        return TimeCondition(
            start_time=_to_time(_pick(params, "start_time", "startTime")),
            end_time=_to_time(_pick(params, "end_time", "endTime")),
        )
    if kind == ConditionType.DEMAND:
        threshold = _pick(params, "demand_threshold", "demandThreshold")
        if isinstance(threshold, bool) or not isinstance(threshold, Real):
            raise InvalidRule("demand condition needs a numeric demand_threshold")
        return DemandCondition(demand_threshold=float(threshold))
    if kind == ConditionType.WEATHER:
        return WeatherCondition(weather_condition=_required_str(params, "weather_condition", "weatherCondition"))
    return SpecialEventCondition(event_name=_required_str(params, "event_name", "eventName"))


def _pick(mapping: Mapping[str, Any], *keys: str):
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return None


def _required_str(params: Mapping[str, Any], *keys: str) -> str:
    value = _pick(params, *keys)
    if not isinstance(value, str) or not value:
        raise InvalidRule(f"condition needs a non-empty {keys[0]}")
    return value


def _to_time(value) -> dt.time:
    # accepts a time, "HH:MM[:SS]" or an hour of day (0-23)
    if isinstance(value, dt.time):
        return value
    if isinstance(value, str):
        try:
            return dt.time.fromisoformat(value)
        except ValueError:
            raise InvalidRule(f"invalid time of day {value!r}") from None
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 23:
        return dt.time(hour=value)
    raise InvalidRule(f"invalid time of day {value!r}")


def parse_decimal(value, name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidRule(f"{name} must be a number")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise InvalidRule(f"{name} must be a number") from None
    if not result.is_finite():
        raise InvalidRule(f"{name} must be finite")
    return result


def parse_priority(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRule("priority must be an integer")
    return value


def parse_created_at(value) -> dt.datetime:
    # accepts a datetime, an ISO 8601 string or epoch milliseconds; missing means now
    if value is None:
        return dt.datetime.utcnow()
    if isinstance(value, str):
        try:
            value = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidRule(f"invalid created_at {value!r}") from None
    elif isinstance(value, Real) and not isinstance(value, bool):
        try:
            value = dt.datetime.fromtimestamp(float(value) / 1000, dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidRule(f"created_at {value!r} is out of range") from None
    elif not isinstance(value, dt.datetime):
        raise InvalidRule(f"invalid created_at {value!r}")

    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value
