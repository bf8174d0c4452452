"""Supplier analytics DTOs."""

from __future__ import annotations

from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SupplierStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    supplier: str
    order_count: int
    item_count: int
    total_amount: Decimal


class SupplierStatistics(BaseModel):
    """Totals over every supplier plus the top five by amount."""

    model_config = ConfigDict(frozen=True)

    total_suppliers: int
    suppliers: List[SupplierStat]
    top_suppliers: List[SupplierStat]


class SupplierGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    supplier: str
    item_count: int
    total_value: Decimal
    items: List[str]


class OrderSupplierSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    suppliers: List[SupplierGroup]
    total_value: Decimal
    has_multiple_suppliers: bool
