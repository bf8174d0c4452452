"""Project domain constants."""

from django.db import models

from modules.orders.constants import OrderKind


class ProjectStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


# Display prefixes used when naming a project after its order.
PROJECT_NAME_PREFIXES: dict[str, str] = {
    OrderKind.AUXILIARY: "輔材專案",
    OrderKind.FINISHED: "完成材專案",
    OrderKind.GENERAL: "專案",
}

PROJECT_NAME_MAX_LENGTH = 255
