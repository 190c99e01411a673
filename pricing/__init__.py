"""
Dynamic pricing package.

Public API:
- apply_rules, PricingResult, RuleDiagnostic
- PricingRule, PricingContext and the condition classes
"""
from .evaluator import PricingResult, RuleDiagnostic, apply_rules
from .models import (
    AdjustmentType,
    ConditionType,
    DemandCondition,
    PricingContext,
    PricingRule,
    SpecialEventCondition,
    TimeCondition,
    WeatherCondition,
    condition_from_record,
    condition_to_record,
)

__all__ = [
    "apply_rules",
    "PricingResult",
    "RuleDiagnostic",
    "AdjustmentType",
    "ConditionType",
    "DemandCondition",
    "PricingContext",
    "PricingRule",
    "SpecialEventCondition",
    "TimeCondition",
    "WeatherCondition",
    "condition_from_record",
    "condition_to_record",
]
