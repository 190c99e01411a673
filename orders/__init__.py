"""
Orders domain package.

Public API:
- Domain models: User, Restaurant, MenuItem, Order, Delivery, BatchOrder + status enums
- Errors: the typed failures shared by every engine
- Billing: build_order, calculate_total_bill

Batch dispatch lives in orders.batching (import it from there).
"""
from .billing import build_order, calculate_total_bill
from .errors import (
    BatchOrderNotFound,
    CoordinationError,
    CourierNotFound,
    DeliveryNotFound,
    DuplicateEmail,
    InvalidInput,
    InvalidRole,
    InvalidRule,
    InvalidTransition,
    LoyaltyProgramNotFound,
    MenuItemNotFound,
    OrderNotFound,
    PricingRuleNotFound,
    RecordNotFound,
    RestaurantNotFound,
    UserNotFound,
)
from .models import (
    BatchOrder,
    BatchStatus,
    Delivery,
    DeliveryStatus,
    MenuItem,
    Order,
    OrderStatus,
    Restaurant,
    User,
    UserRole,
)

__all__ = [
    "BatchOrder",
    "BatchStatus",
    "Delivery",
    "DeliveryStatus",
    "MenuItem",
    "Order",
    "OrderStatus",
    "Restaurant",
    "User",
    "UserRole",
    "build_order",
    "calculate_total_bill",
    "CoordinationError",
    "InvalidInput",
    "DuplicateEmail",
    "InvalidRole",
    "InvalidRule",
    "InvalidTransition",
    "RecordNotFound",
    "UserNotFound",
    "CourierNotFound",
    "OrderNotFound",
    "RestaurantNotFound",
    "MenuItemNotFound",
    "DeliveryNotFound",
    "BatchOrderNotFound",
    "PricingRuleNotFound",
    "LoyaltyProgramNotFound",
]
