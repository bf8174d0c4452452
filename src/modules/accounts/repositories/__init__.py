"""Account repositories package."""

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.repositories.interfaces import IUserRepository
from modules.accounts.repositories.memory import UserMemoryRepository

__all__ = ["IUserRepository", "UserDjangoRepository", "UserMemoryRepository"]
