"""Order domain constants.

Defines status choices, order kinds and the valid status transitions of
the order state machine.
"""

from django.db import models

from modules.accounts.constants import Role
from modules.materials.constants import MaterialType


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    PROCESSING = "PROCESSING", "Processing"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


class OrderKind(models.TextChoices):
    AUXILIARY = "AUXILIARY", "Auxiliary material order"
    FINISHED = "FINISHED", "Finished goods order"
    GENERAL = "GENERAL", "General order"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

CANCELLABLE_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

# Statuses from which an order must have a tracking project.
TRACKED_STATES: set[str] = {
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.COMPLETED,
}

# Material type every line of a kind must have; GENERAL accepts both.
KIND_MATERIAL_TYPE: dict[str, str] = {
    OrderKind.AUXILIARY: MaterialType.AUXILIARY,
    OrderKind.FINISHED: MaterialType.FINISHED,
}

# Roles allowed to place an order of a kind; GENERAL is open to everyone.
KIND_CREATOR_ROLES: dict[str, frozenset[str]] = {
    OrderKind.AUXILIARY: frozenset({Role.PM, Role.ADMIN}),
    OrderKind.FINISHED: frozenset({Role.AM, Role.ADMIN}),
}

ORDER_NAME_MAX_LENGTH = 100
