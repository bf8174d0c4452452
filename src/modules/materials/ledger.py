"""Inventory ledger: the only code path that changes ``Material.quantity``.

Every call runs inside the injected unit of work and locks the material
row first, so two concurrent reservations of the same material are
serialized and stock can never go negative.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from modules.materials.exceptions import InsufficientStock, InvalidQuantity, MaterialNotFound

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import IUnitOfWork
    from modules.materials.models import Material
    from modules.materials.repositories.interfaces import IMaterialRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(
        self,
        material_repository: IMaterialRepository,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._material_repo = material_repository
        self._uow = unit_of_work

    def reserve(self, material_id: Any, quantity: int) -> Material:
        """Decrement stock by *quantity*.

        Raises:
            InvalidQuantity: quantity is not a positive integer.
            MaterialNotFound: material does not exist.
            InsufficientStock: quantity exceeds the available stock.
        """
        _require_positive(quantity)
        with self._uow.atomic():
            material = self._lock(material_id)
            if quantity > material.quantity:
                logger.warning(
                    "inventory.insufficient_stock",
                    material_id=str(material.id),
                    requested=quantity,
                    available=material.quantity,
                )
                raise InsufficientStock(
                    f"Material {material.name}: requested {quantity}, "
                    f"available {material.quantity}.",
                    material_id=str(material.id),
                    requested=quantity,
                    available=material.quantity,
                )
            material.quantity -= quantity
            self._material_repo.save(material)

        logger.info(
            "inventory.reserved",
            material_id=str(material.id),
            quantity=quantity,
            remaining=material.quantity,
        )
        return material

    def restore(self, material_id: Any, quantity: int) -> Material:
        """Increment stock by *quantity* (order cancellation)."""
        _require_positive(quantity)
        with self._uow.atomic():
            material = self._lock(material_id)
            material.quantity += quantity
            self._material_repo.save(material)

        logger.info(
            "inventory.restored",
            material_id=str(material.id),
            quantity=quantity,
            restored_stock=material.quantity,
        )
        return material

    def set_quantity(self, material_id: Any, quantity: int) -> Material:
        """Administrative overwrite of the stock level."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidQuantity(
                "Quantity must be a non-negative integer.", quantity=quantity
            )
        with self._uow.atomic():
            material = self._lock(material_id)
            previous = material.quantity
            material.quantity = quantity
            self._material_repo.save(material)

        logger.info(
            "inventory.quantity_set",
            material_id=str(material.id),
            previous=previous,
            quantity=quantity,
        )
        return material

    def _lock(self, material_id: Any) -> Material:
        material = self._material_repo.get_for_update(material_id)
        if material is None:
            raise MaterialNotFound(
                f"Material {material_id} not found.", material_id=str(material_id)
            )
        return material


def _require_positive(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity("Quantity must be at least 1.", quantity=quantity)
