"""Material DTOs for the Service Layer.

Framework-agnostic, immutable (``frozen=True``) Pydantic v2 contracts
between the DRF serializers and ``MaterialService``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.materials.constants import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS, MaterialType

class CreateMaterialDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(gt=0, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES)
    quantity: int = Field(default=0, ge=0)
    supplier: str = Field(default="", max_length=255)
    type: MaterialType

    @field_validator("supplier", mode="before")
    @classmethod
    def none_supplier_is_blank(cls, v: Optional[str]) -> str:
        return v or ""

class UpdateMaterialDTO(BaseModel):
    """Partial update; ``None`` means "leave unchanged".

    Stock is deliberately absent: quantities move through the ledger.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(
        default=None,
        gt=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    supplier: Optional[str] = Field(default=None, max_length=255)
    type: Optional[MaterialType] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)
