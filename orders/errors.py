"""
Purpose: Typed failures for the coordination backend.
Each kind is a distinct class so the boundary layer can map it to its own
status code and wording. Routing failures live in routing.errors.
"""


class CoordinationError(Exception):
    """Base class for every domain failure raised by the engines and the dispatcher."""
    pass


class InvalidInput(CoordinationError):
    """Malformed or missing required field (e.g. an empty locations list)."""
    pass


class DuplicateEmail(InvalidInput):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} already exists")


class InvalidRole(CoordinationError):
    """Referenced user exists but lacks the required role."""

    def __init__(self, user_id: str, required_role):
        self.user_id = user_id
        self.required_role = required_role
        super().__init__(f"User {user_id} does not have role {getattr(required_role, 'value', required_role)}")


class InvalidRule(CoordinationError):
    """A pricing rule has an unrecognized condition or adjustment kind."""

    def __init__(self, message: str, rule_id=None):
        self.rule_id = rule_id
        super().__init__(message)


class InvalidTransition(CoordinationError):
    """A status change not allowed by the delivery/batch state machines."""
    pass


class RecordNotFound(CoordinationError):
    """Referenced identifier has no matching record."""

    record_name = "Record"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{self.record_name} {record_id} not found")


class UserNotFound(RecordNotFound):
    record_name = "User"


class CourierNotFound(RecordNotFound):
    record_name = "Courier"


class OrderNotFound(RecordNotFound):
    record_name = "Order"


class RestaurantNotFound(RecordNotFound):
    record_name = "Restaurant"


class MenuItemNotFound(RecordNotFound):
    record_name = "Menu item"


class DeliveryNotFound(RecordNotFound):
    record_name = "Delivery"


class BatchOrderNotFound(RecordNotFound):
    record_name = "Batch order"


class PricingRuleNotFound(RecordNotFound):
    record_name = "Pricing rule"


class LoyaltyProgramNotFound(RecordNotFound):
    record_name = "Loyalty program"
