from .accrual import AccrualResult, accrue, calculate_points, calculate_tier
from .models import LoyaltyProgram, Tier
from .policy import LoyaltyPolicy, default_loyalty_policy

__all__ = [
    "AccrualResult",
    "accrue",
    "calculate_points",
    "calculate_tier",
    "LoyaltyProgram",
    "Tier",
    "LoyaltyPolicy",
    "default_loyalty_policy",
]
