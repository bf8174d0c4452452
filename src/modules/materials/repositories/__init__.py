"""Material repositories package."""

from modules.materials.repositories.django_repository import MaterialDjangoRepository
from modules.materials.repositories.interfaces import IMaterialRepository
from modules.materials.repositories.memory import MaterialMemoryRepository

__all__ = ["IMaterialRepository", "MaterialDjangoRepository", "MaterialMemoryRepository"]
