"""Django ORM implementation of the Project repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count

from modules.core.dtos import page_bounds
from modules.projects.exceptions import ProjectAlreadyExists
from modules.projects.models import Project
from modules.projects.repositories.interfaces import IProjectRepository

logger = structlog.get_logger(__name__)


class ProjectDjangoRepository(IProjectRepository):
    def create(self, project: Project) -> Project:
        try:
            # Savepoint: the caller's transaction survives the IntegrityError.
            with transaction.atomic():
                project.save(force_insert=True)
        except IntegrityError as exc:
            logger.warning("project.duplicate_rejected", order_id=str(project.order_id))
            raise ProjectAlreadyExists(
                f"Order {project.order_id} already has a project.",
                order_id=str(project.order_id),
            ) from exc
        return project

    def get_by_id(self, id: Any) -> Optional[Project]:
        try:
            return Project.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_order(self, order_id: Any) -> Optional[Project]:
        try:
            return Project.objects.filter(order_id=order_id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[Project]:
        try:
            return Project.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Project], int]:
        queryset = Project.objects.all()
        for key, value in (filters or {}).items():
            if key in {"overall_status", "order_id"} and value is not None:
                queryset = queryset.filter(**{key: value})
        start, end = page_bounds(page, limit)
        return list(queryset[start:end]), queryset.count()

    def count_by_status(self) -> Dict[str, int]:
        rows = Project.objects.order_by().values("overall_status").annotate(count=Count("id"))
        return {row["overall_status"]: row["count"] for row in rows}

    def save(self, entity: Project) -> Project:
        entity.save()
        return entity

    def delete(self, id: Any) -> bool:
        try:
            deleted, _ = Project.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0

    def delete_for_order(self, order_id: Any) -> bool:
        try:
            deleted, _ = Project.objects.filter(order_id=order_id).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0
