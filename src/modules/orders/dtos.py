"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  These are
the contracts between the API layer (DRF Serializers) and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (kind + nested items).
- ``OrderLine``: read model of a line joined with its material.
- ``OrderDetail``: order + lines + project + latest status per column.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import ORDER_NAME_MAX_LENGTH, OrderKind

UNKNOWN_SUPPLIER = "Unknown Supplier"


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    ``unit_price`` and ``supplier`` are resolved by the Service Layer
    from the material catalog.
    """

    model_config = ConfigDict(frozen=True)

    material_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Each item quantity must be positive.
    - A material appears at most once.
    """

    model_config = ConfigDict(frozen=True)

    kind: OrderKind = OrderKind.GENERAL
    items: List[CreateOrderItemDTO]
    name: str = Field(default="", max_length=ORDER_NAME_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> str:
        return (v or "").strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def no_duplicate_materials(self):
        """Prevent duplicate material IDs in the same order."""
        material_ids = [item.material_id for item in self.items]
        if len(material_ids) != len(set(material_ids)):
            raise ValueError("Duplicate material IDs are not allowed in the same order.")
        return self


class OrderFilters(BaseModel):
    """Listing filters; every field is optional."""

    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    kind: Optional[str] = None
    owner_id: Optional[int] = None
    created_from: Optional[date] = None
    created_to: Optional[date] = None

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


class OrderLine(BaseModel):
    """One order line joined with its order and material.

    ``supplier`` is already resolved: the line snapshot, else the
    material's current supplier, else ``UNKNOWN_SUPPLIER``.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    order_id: UUID
    order_status: str
    order_kind: str
    material_id: UUID
    material_name: str
    quantity: int
    unit_price: Decimal
    supplier: str

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_price


def resolve_supplier(snapshot: Optional[str], current: Optional[str]) -> str:
    return snapshot or current or UNKNOWN_SUPPLIER


class OrderDetail(BaseModel):
    """Order with its lines, tracking project and current workflow state."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    order: Any
    lines: List[OrderLine]
    project: Optional[Any] = None
    latest_status: Dict[str, Optional[Any]] = Field(default_factory=dict)


class OrderStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    by_status: Dict[str, int]
    generated_at: datetime
