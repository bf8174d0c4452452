"""In-memory user directory.

Authentication always goes through ``django.contrib.auth``, so users
that were never registered here are resolved through the optional
*directory* and cached in the store.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from modules.accounts.constants import Role
from modules.accounts.dtos import UserSummary
from modules.accounts.repositories.interfaces import IUserRepository
from modules.core.repositories.memory import InMemoryStore


class UserMemoryRepository(IUserRepository):
    def __init__(
        self, store: InMemoryStore, directory: Optional[IUserRepository] = None
    ) -> None:
        self._store = store
        self._directory = directory

    def register(self, id: int, username: str, role: str = Role.USER) -> UserSummary:
        """Add (or replace) a user."""
        user = UserSummary(id=id, username=username, role=role)
        self._store.put("users", id, user)
        return user

    def get_by_id(self, id: Any) -> Optional[UserSummary]:
        user = self._store.get("users", id)
        if user is None and self._directory is not None:
            user = self._directory.get_by_id(id)
            if user is not None:
                self._store.put("users", user.id, user)
        return user

    def get_many(self, ids: Iterable[Any]) -> Dict[Any, UserSummary]:
        found = {}
        missing = []
        for id in ids:
            user = self._store.get("users", id)
            if user is None:
                missing.append(id)
            else:
                found[id] = user
        if missing and self._directory is not None:
            for id, user in self._directory.get_many(missing).items():
                self._store.put("users", id, user)
                found[id] = user
        return found
