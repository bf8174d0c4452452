"""Material model.

Business rules implemented:
- ``quantity`` never goes negative (DB check constraint + ledger).
- ``price`` is strictly positive with at most four decimal places.
- ``supplier`` is optional; absent suppliers are stored as ``""``.
- ``quantity`` is only changed through ``InventoryLedger``.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.materials.constants import (
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    MaterialType,
)


class Material(BaseModel):
    """Stock-keeping unit that orders draw from."""

    name: models.CharField = models.CharField(max_length=255)
    category: models.CharField = models.CharField(max_length=100)
    price: models.DecimalField = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0.0001"))],
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    supplier: models.CharField = models.CharField(max_length=255, blank=True, default="")
    type: models.CharField = models.CharField(
        max_length=20,
        choices=MaterialType.choices,
    )

    class Meta:
        db_table = "materials"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["type"], name="materials_type_idx"),
            models.Index(fields=["category"], name="materials_category_idx"),
            models.Index(fields=["supplier"], name="materials_supplier_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="materials_quantity_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="materials_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} [{self.type}] x{self.quantity}"
