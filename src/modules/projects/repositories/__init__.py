"""Project repositories package."""

from modules.projects.repositories.django_repository import ProjectDjangoRepository
from modules.projects.repositories.interfaces import IProjectRepository
from modules.projects.repositories.memory import ProjectMemoryRepository

__all__ = ["IProjectRepository", "ProjectDjangoRepository", "ProjectMemoryRepository"]
