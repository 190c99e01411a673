"""
Purpose: Dynamic pricing rule evaluation.
What it does:
- filters a restaurant's rules down to the ones whose condition matches the context
- orders them by priority (highest first), then creation order
- applies them cumulatively to the base price:
    percentage: price * (1 + value / 100)
    fixed:      price + value
  and clamps the running price at zero after every step

A misconfigured rule is skipped and reported as a diagnostic; it never blocks
pricing for the rest of the restaurant's rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional, Sequence, Union

from orders.errors import InvalidInput, InvalidRule

from .models import (
    CONDITION_CLASSES,
    AdjustmentType,
    PricingContext,
    PricingRule,
    parse_adjustment_type,
    parse_created_at,
    parse_decimal,
    parse_priority,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class RuleDiagnostic:
    rule_id: Optional[str]
    message: str


@dataclass(frozen=True)
class PricingResult:
    price: Decimal
    applied_rule_ids: List[str] = field(default_factory=list)
    diagnostics: List[RuleDiagnostic] = field(default_factory=list)


def apply_rules(
    base_price,
    rules: Sequence[Union[PricingRule, Mapping[str, Any]]],
    context: PricingContext,
) -> PricingResult:
    """
    Price base_price under every matching rule.

    rules may hold PricingRule objects or raw rule records (mappings); records
    are validated here and any InvalidRule ends up in the diagnostics.
    """
    price = _base_price(base_price)

    diagnostics: List[RuleDiagnostic] = []
    matching = []
    for index, candidate in enumerate(rules):
        try:
            rule = _checked_rule(candidate)
        except InvalidRule as exc:
            logger.warning("skipping pricing rule %s: %s", exc.rule_id, exc)
            diagnostics.append(RuleDiagnostic(rule_id=exc.rule_id, message=str(exc)))
            continue

        if rule.condition.matches(context):
            matching.append((rule, index))

    # priority desc, then first-created first (timestamp, then creation sequence), then input order
    matching.sort(key=lambda pair: (-pair[0].priority, pair[0].created_at, pair[0].sequence, pair[1]))

    applied: List[str] = []
    for rule, _ in matching:
        if rule.adjustment_type == AdjustmentType.PERCENTAGE:
            price = price * (1 + rule.adjustment_value / HUNDRED)
        else:
            price = price + rule.adjustment_value

        if price < ZERO:
            price = ZERO
        applied.append(rule.id)

    if applied:
        logger.debug("applied %d pricing rules: %s -> %s", len(applied), base_price, price)

    return PricingResult(price=price, applied_rule_ids=applied, diagnostics=diagnostics)


def _base_price(value) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidInput("base price must be a number")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise InvalidInput(f"base price {value!r} is not a number") from None
    if not price.is_finite() or price < ZERO:
        raise InvalidInput("base price must be a non-negative finite number")
    return price


def _checked_rule(candidate) -> PricingRule:
    if isinstance(candidate, Mapping):
        return PricingRule.from_record(candidate)

    rule_id = getattr(candidate, "id", None)
    if not isinstance(candidate, PricingRule):
        raise InvalidRule(f"not a pricing rule: {candidate!r}", rule_id=rule_id)
    if not isinstance(candidate.condition, CONDITION_CLASSES):
        raise InvalidRule(f"unknown condition {candidate.condition!r}", rule_id=rule_id)
    # rules built directly bypass from_record, so normalize their fields here
    try:
        return replace(
            candidate,
            adjustment_type=parse_adjustment_type(candidate.adjustment_type),
            adjustment_value=parse_decimal(candidate.adjustment_value, "adjustment_value"),
            priority=parse_priority(candidate.priority),
            created_at=parse_created_at(candidate.created_at),
        )
    except InvalidRule as exc:
        exc.rule_id = rule_id
        raise
