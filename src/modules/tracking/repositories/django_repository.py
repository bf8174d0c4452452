"""Django ORM implementation of the status update log."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError

from modules.tracking.constants import COLUMNS
from modules.tracking.models import StatusUpdate
from modules.tracking.repositories.interfaces import IStatusUpdateRepository


class StatusUpdateDjangoRepository(IStatusUpdateRepository):
    def add(self, update: StatusUpdate) -> StatusUpdate:
        update.save(force_insert=True)
        return update

    def for_project(self, project_id: Any) -> List[StatusUpdate]:
        try:
            return list(
                StatusUpdate.objects.filter(project_id=project_id).order_by("created_at", "id")
            )
        except (ValueError, ValidationError):
            return []

    def latest(self, project_id: Any) -> Dict[str, Optional[StatusUpdate]]:
        result: Dict[str, Optional[StatusUpdate]] = {column: None for column in COLUMNS}
        for column in COLUMNS:
            try:
                result[column] = (
                    StatusUpdate.objects.filter(project_id=project_id, status_type=column)
                    .order_by("-created_at", "-id")
                    .first()
                )
            except (ValueError, ValidationError):
                return result
        return result

    def delete_for_project(self, project_id: Any) -> int:
        deleted, _ = StatusUpdate.objects.filter(project_id=project_id).delete()
        return deleted
