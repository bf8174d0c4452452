"""In-memory implementation of the Project repository."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from modules.core.dtos import page_bounds
from modules.core.repositories.memory import InMemoryStore, as_uuid
from modules.projects.exceptions import ProjectAlreadyExists
from modules.projects.models import Project
from modules.projects.repositories.interfaces import IProjectRepository


class ProjectMemoryRepository(IProjectRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def create(self, project: Project) -> Project:
        with self._store.lock:
            if self.get_by_order(project.order_id) is not None:
                raise ProjectAlreadyExists(
                    f"Order {project.order_id} already has a project.",
                    order_id=str(project.order_id),
                )
            return self._store.put("projects", project.id, project)

    def get_by_id(self, id: Any) -> Optional[Project]:
        key = as_uuid(id)
        return self._store.get("projects", key) if key else None

    def get_by_order(self, order_id: Any) -> Optional[Project]:
        key = as_uuid(order_id)
        for project in self._store.all("projects"):
            if project.order_id == key:
                return project
        return None

    def get_for_update(self, id: Any) -> Optional[Project]:
        # The unit of work already holds the store lock.
        return self.get_by_id(id)

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Project], int]:
        filters = filters or {}
        rows = self._store.all("projects")
        if filters.get("overall_status"):
            rows = [p for p in rows if p.overall_status == filters["overall_status"]]
        if filters.get("order_id"):
            rows = [p for p in rows if p.order_id == as_uuid(filters["order_id"])]
        rows.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        start, end = page_bounds(page, limit)
        return rows[start:end], len(rows)

    def count_by_status(self) -> Dict[str, int]:
        return dict(Counter(p.overall_status for p in self._store.all("projects")))

    def save(self, entity: Project) -> Project:
        return self._store.put("projects", entity.id, entity)

    def delete(self, id: Any) -> bool:
        key = as_uuid(id)
        return self._store.remove("projects", key) if key else False

    def delete_for_order(self, order_id: Any) -> bool:
        with self._store.lock:
            project = self.get_by_order(order_id)
            return self.delete(project.id) if project else False
