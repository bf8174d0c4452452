"""Order and OrderItem models.

Business rules implemented:
- ``total_amount`` is fixed at creation (sum of ``quantity * unit_price``).
- OrderItem snapshots the material price and supplier at creation time.
- Material FK uses PROTECT so referenced materials cannot vanish.
- Status transitions are validated at the service layer against
  ``VALID_TRANSITIONS``.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.materials.constants import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS
from modules.orders.constants import (
    ORDER_NAME_MAX_LENGTH,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderKind,
    OrderStatus,
)


class Order(BaseModel):
    """Order aggregate root.

    ``name`` is an optional display name; ``""`` means unnamed.
    """

    owner: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="material_orders",
    )
    name: models.CharField = models.CharField(
        max_length=ORDER_NAME_MAX_LENGTH, blank=True, default=""
    )
    kind: models.CharField = models.CharField(
        max_length=20,
        choices=OrderKind.choices,
        default=OrderKind.GENERAL,
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS + 4,
        decimal_places=PRICE_DECIMAL_PLACES,
        default=Decimal("0"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["kind"], name="orders_kind_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __str__(self) -> str:
        return f"{self.name or self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Material.

    ``unit_price`` and ``supplier`` are snapshots taken when the order is
    placed; later catalog edits do not change them.  ``position`` keeps
    the caller's line order.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    material: models.ForeignKey = models.ForeignKey(
        "materials.Material",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    supplier: models.CharField = models.CharField(max_length=255, blank=True, default="")
    position: models.PositiveSmallIntegerField = models.PositiveSmallIntegerField(
        default=0
    )

    class Meta:
        db_table = "order_items"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def __str__(self) -> str:
        return f"{self.material_id} x{self.quantity} ({self.subtotal})"
