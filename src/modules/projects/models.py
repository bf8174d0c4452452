"""Project model: the tracking record spawned for each order."""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.projects.constants import PROJECT_NAME_MAX_LENGTH, ProjectStatus


class Project(BaseModel):
    """One per order (``OneToOneField`` enforces the uniqueness in the DB)."""

    order: models.OneToOneField = models.OneToOneField(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="project",
    )
    project_name: models.CharField = models.CharField(max_length=PROJECT_NAME_MAX_LENGTH)
    overall_status: models.CharField = models.CharField(
        max_length=20,
        choices=ProjectStatus.choices,
        default=ProjectStatus.ACTIVE,
    )

    class Meta:
        db_table = "projects"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["overall_status"], name="projects_status_idx"),
        ]

    @property
    def is_completed(self) -> bool:
        return self.overall_status == ProjectStatus.COMPLETED

    def __str__(self) -> str:
        return f"{self.project_name} ({self.overall_status})"
