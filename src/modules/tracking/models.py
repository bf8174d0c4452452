"""StatusUpdate model: the append-only log behind the four columns.

Rows are never edited.  The current value of a column is the newest row
of that ``status_type``; ties on ``created_at`` fall back to ``id``,
which is a time-ordered UUIDv7 and therefore follows insertion order.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.accounts.constants import Role
from modules.core.models import BaseModel
from modules.tracking.constants import STATUS_VALUE_MAX_LENGTH, StatusType


class StatusUpdate(BaseModel):
    project: models.ForeignKey = models.ForeignKey(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="status_updates",
    )
    author: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="status_updates",
    )
    author_role: models.CharField = models.CharField(
        max_length=20, choices=Role.choices, default=Role.USER
    )
    status_type: models.CharField = models.CharField(
        max_length=20, choices=StatusType.choices
    )
    status_value: models.CharField = models.CharField(
        max_length=STATUS_VALUE_MAX_LENGTH, blank=True, default=""
    )
    additional_data: models.JSONField = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "status_updates"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["project", "status_type", "-created_at"],
                name="su_project_type_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.status_type}={self.status_value!r}"
