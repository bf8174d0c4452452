"""Status update repositories package."""

from modules.tracking.repositories.django_repository import StatusUpdateDjangoRepository
from modules.tracking.repositories.interfaces import IStatusUpdateRepository
from modules.tracking.repositories.memory import StatusUpdateMemoryRepository

__all__ = [
    "IStatusUpdateRepository",
    "StatusUpdateDjangoRepository",
    "StatusUpdateMemoryRepository",
]
