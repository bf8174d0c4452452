"""User directory interface.

Read-only: users are managed by ``django.contrib.auth``; the workflow
only needs to resolve an author id to a username and role.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from modules.accounts.dtos import UserSummary


class IUserRepository(ABC):
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[UserSummary]:
        """Return the user summary, or ``None`` when unknown."""

    @abstractmethod
    def get_many(self, ids: Iterable[Any]) -> Dict[Any, UserSummary]:
        """Batch look-up keyed by user id; unknown ids are omitted."""
