"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.  The
DRF exception handler translates them into HTTP responses by kind.
"""

from __future__ import annotations

from modules.core import exceptions as kinds


class OrderNotFound(kinds.NotFound):
    """The requested order does not exist."""


class OrderPermissionDenied(kinds.Forbidden):
    """The actor may not perform this operation on the order."""


class InvalidOrderState(kinds.InvalidState):
    """The operation is not valid for the order's current status."""


class InvalidOrderStatus(kinds.ValidationError):
    """An unknown status value was supplied."""


class InvalidOrderName(kinds.ValidationError):
    """Display name is empty or longer than 100 characters."""


class InvalidOrderItems(kinds.ValidationError):
    """Line items are empty, duplicated or otherwise malformed."""
