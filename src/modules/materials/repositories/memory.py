"""In-memory implementation of the Material repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from modules.core.dtos import page_bounds
from modules.core.repositories.memory import InMemoryStore, as_uuid
from modules.materials.models import Material
from modules.materials.repositories.interfaces import IMaterialRepository


def _matches(material: Material, filters: Dict[str, Any]) -> bool:
    for key in ("type", "category", "supplier"):
        if filters.get(key) and getattr(material, key) != filters[key]:
            return False
    search = (filters.get("search") or "").lower()
    if search and search not in material.name.lower() and search not in material.category.lower():
        return False
    return True


class MaterialMemoryRepository(IMaterialRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_by_id(self, id: Any) -> Optional[Material]:
        key = as_uuid(id)
        return self._store.get("materials", key) if key else None

    def get_for_update(self, id: Any) -> Optional[Material]:
        # The unit of work already holds the store lock.
        return self.get_by_id(id)

    def get_many(self, ids: List[Any]) -> List[Material]:
        found = (self.get_by_id(id) for id in ids)
        return [material for material in found if material is not None]

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Material], int]:
        filters = filters or {}
        rows = [m for m in self._store.all("materials") if _matches(m, filters)]
        rows.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        start, end = page_bounds(page, limit)
        return rows[start:end], len(rows)

    def categories(self, type: Optional[str] = None) -> List[str]:
        rows = self._store.all("materials")
        return sorted({m.category for m in rows if not type or m.type == type})

    def suppliers(self, type: Optional[str] = None) -> List[str]:
        rows = self._store.all("materials")
        return sorted({m.supplier for m in rows if m.supplier and (not type or m.type == type)})

    def is_referenced(self, id: Any) -> bool:
        key = as_uuid(id)
        return any(item.material_id == key for item in self._store.all("order_items"))

    def save(self, entity: Material) -> Material:
        return self._store.put("materials", entity.id, entity)

    def delete(self, id: Any) -> bool:
        key = as_uuid(id)
        return self._store.remove("materials", key) if key else False
