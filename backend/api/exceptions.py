"""
Maps domain failures to HTTP responses.

Every error kind has its own status and wording; in particular a missing
courier and a user without the courier role never read the same.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from orders.errors import (
    BatchOrderNotFound,
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
    RestaurantNotFound,
    UserNotFound,
)
from routing.errors import InvalidCoordinate, OSRMError

logger = logging.getLogger(__name__)

# exception class -> (status, message builder)
ERROR_RESPONSES = {
    DuplicateEmail: (status.HTTP_409_CONFLICT, lambda exc: "Email already exists."),
    InvalidInput: (status.HTTP_400_BAD_REQUEST, lambda exc: f"Invalid input: {exc}."),
    InvalidCoordinate: (status.HTTP_400_BAD_REQUEST, lambda exc: f"Invalid coordinate {exc.value!r}: {exc.reason}."),
    InvalidRole: (
        status.HTTP_400_BAD_REQUEST,
        lambda exc: f"User {exc.user_id} does not have the {exc.required_role.value} role.",
    ),
    InvalidRule: (status.HTTP_400_BAD_REQUEST, lambda exc: f"Invalid pricing rule: {exc}."),
    InvalidTransition: (status.HTTP_400_BAD_REQUEST, lambda exc: f"Invalid status change: {exc}."),
    UserNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"User {exc.record_id} not found."),
    CourierNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Delivery person {exc.record_id} not found."),
    OrderNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Order {exc.record_id} not found."),
    RestaurantNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Restaurant {exc.record_id} not found."),
    MenuItemNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Menu item {exc.record_id} not found."),
    DeliveryNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Delivery {exc.record_id} not found."),
    BatchOrderNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Batch order {exc.record_id} not found."),
    PricingRuleNotFound: (status.HTTP_404_NOT_FOUND, lambda exc: f"Pricing rule {exc.record_id} not found."),
    LoyaltyProgramNotFound: (
        status.HTTP_404_NOT_FOUND,
        lambda exc: f"Loyalty program for user {exc.record_id} not found.",
    ),
    OSRMError: (status.HTTP_502_BAD_GATEWAY, lambda exc: "Routing service unavailable."),
}


def coordination_exception_handler(exc, context):
    for exc_class in type(exc).__mro__:
        if exc_class in ERROR_RESPONSES:
            status_code, message = ERROR_RESPONSES[exc_class]
            logger.info("%s -> %s: %s", type(exc).__name__, status_code, exc)
            return Response({"status": status_code, "error": message(exc)}, status=status_code)

    return exception_handler(exc, context)
