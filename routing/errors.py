"""
Purpose: Exceptions raised by the routing package.
Kept free of any orders/pricing imports so routing stays a leaf package.
"""


class RoutingError(Exception):
    """Base class for routing failures."""
    pass


class InvalidCoordinate(RoutingError, ValueError):
    """A coordinate failed numeric parsing or is not a finite real number."""

    def __init__(self, value, reason: str = "not a finite real number"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid coordinate {value!r}: {reason}")


class OSRMError(RoutingError):
    """Custom exception for OSRM client errors."""
    pass
