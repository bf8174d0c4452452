"""Material catalog service layer.

Catalog reads are open to every authenticated actor; writes (create,
update, delete and stock overwrite) require ``WAREHOUSE`` or ``ADMIN``.
Stock levels are never written here directly: ``set_quantity``
delegates to ``InventoryLedger``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.accounts.constants import CATALOG_WRITER_ROLES
from modules.core.dtos import Page, clamp_paging
from modules.materials.exceptions import (
    CatalogPermissionDenied,
    MaterialInUse,
    MaterialNotFound,
)
from modules.materials.models import Material

if TYPE_CHECKING:
    from modules.accounts.actors import Actor
    from modules.core.repositories.interfaces import IUnitOfWork
    from modules.materials.dtos import CreateMaterialDTO, UpdateMaterialDTO
    from modules.materials.ledger import InventoryLedger
    from modules.materials.repositories.interfaces import IMaterialRepository

logger = structlog.get_logger(__name__)


class MaterialService:
    """Application service for the material catalog."""

    def __init__(
        self,
        material_repository: IMaterialRepository,
        ledger: InventoryLedger,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._material_repo = material_repository
        self._ledger = ledger
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_material(self, actor: Actor, dto: CreateMaterialDTO) -> Material:
        self._require_writer(actor, "create")
        material = Material(
            name=dto.name,
            category=dto.category,
            price=dto.price,
            quantity=dto.quantity,
            supplier=dto.supplier,
            type=dto.type,
        )
        with self._uow.atomic():
            material = self._material_repo.save(material)
        logger.info(
            "material.created",
            material_id=str(material.id),
            type=material.type,
            quantity=material.quantity,
        )
        return material

    def update_material(
        self, actor: Actor, material_id: Any, dto: UpdateMaterialDTO
    ) -> Material:
        self._require_writer(actor, "update")
        changes = dto.changes()
        with self._uow.atomic():
            material = self._material_repo.get_for_update(material_id)
            if material is None:
                raise MaterialNotFound(
                    f"Material {material_id} not found.", material_id=str(material_id)
                )
            for field, value in changes.items():
                setattr(material, field, value)
            material = self._material_repo.save(material)
        logger.info(
            "material.updated", material_id=str(material.id), fields=sorted(changes)
        )
        return material

    def set_quantity(self, actor: Actor, material_id: Any, quantity: int) -> Material:
        self._require_writer(actor, "set_quantity")
        return self._ledger.set_quantity(material_id, quantity)

    def delete_material(self, actor: Actor, material_id: Any) -> None:
        """Remove a material no order line refers to.

        Raises:
            MaterialNotFound: material does not exist.
            MaterialInUse: at least one order line references it.
        """
        self._require_writer(actor, "delete")
        with self._uow.atomic():
            material = self._material_repo.get_for_update(material_id)
            if material is None:
                raise MaterialNotFound(
                    f"Material {material_id} not found.", material_id=str(material_id)
                )
            if self._material_repo.is_referenced(material.id):
                raise MaterialInUse(
                    f"Material {material.name} is referenced by existing orders.",
                    material_id=str(material.id),
                )
            self._material_repo.delete(material.id)
        logger.info("material.deleted", material_id=str(material.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_material(self, material_id: Any) -> Material:
        material = self._material_repo.get_by_id(material_id)
        if material is None:
            raise MaterialNotFound(
                f"Material {material_id} not found.", material_id=str(material_id)
            )
        return material

    def list_materials(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page:
        page, limit = clamp_paging(page, limit)
        items, total = self._material_repo.list(filters, page, limit)
        return Page(items=items, total=total, page=page, limit=limit)

    def list_categories(self, type: Optional[str] = None) -> List[str]:
        return self._material_repo.categories(type)

    def list_suppliers(self, type: Optional[str] = None) -> List[str]:
        return self._material_repo.suppliers(type)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_writer(actor: Actor, operation: str) -> None:
        if actor.role not in CATALOG_WRITER_ROLES:
            raise CatalogPermissionDenied(
                "Only warehouse staff or administrators may modify materials.",
                operation=operation,
                role=actor.role,
            )
