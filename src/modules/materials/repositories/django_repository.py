"""Django ORM implementation of the Material repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Q

from modules.core.dtos import page_bounds
from modules.materials.models import Material
from modules.materials.repositories.interfaces import IMaterialRepository

logger = structlog.get_logger(__name__)


class MaterialDjangoRepository(IMaterialRepository):
    """Concrete Material repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[Material]:
        try:
            return Material.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[Material]:
        """``SELECT ... FOR UPDATE``; must run inside ``transaction.atomic``."""
        try:
            return Material.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_many(self, ids: List[Any]) -> List[Material]:
        try:
            return list(Material.objects.filter(id__in=ids))
        except (ValueError, ValidationError):
            return []

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Material], int]:
        queryset = Material.objects.all()
        filters = filters or {}
        for key in ("type", "category", "supplier"):
            if filters.get(key):
                queryset = queryset.filter(**{key: filters[key]})
        search = filters.get("search")
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(category__icontains=search)
            )
        start, end = page_bounds(page, limit)
        return list(queryset[start:end]), queryset.count()

    def categories(self, type: Optional[str] = None) -> List[str]:
        queryset = Material.objects.all()
        if type:
            queryset = queryset.filter(type=type)
        return list(
            queryset.order_by("category").values_list("category", flat=True).distinct()
        )

    def suppliers(self, type: Optional[str] = None) -> List[str]:
        queryset = Material.objects.exclude(supplier="")
        if type:
            queryset = queryset.filter(type=type)
        return list(
            queryset.order_by("supplier").values_list("supplier", flat=True).distinct()
        )

    def is_referenced(self, id: Any) -> bool:
        from modules.orders.models import OrderItem

        return OrderItem.objects.filter(material_id=id).exists()

    def save(self, entity: Material) -> Material:
        entity.save()
        logger.debug("material.saved", material_id=str(entity.id))
        return entity

    def delete(self, id: Any) -> bool:
        material = self.get_by_id(id)
        if not material:
            return False
        material.delete()
        return True
