"""Django auth implementation of the user directory."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from django.contrib.auth import get_user_model

from modules.accounts.actors import role_for_user
from modules.accounts.dtos import UserSummary
from modules.accounts.repositories.interfaces import IUserRepository


def _to_summary(user: Any) -> UserSummary:
    return UserSummary(id=user.pk, username=user.get_username(), role=role_for_user(user))


class UserDjangoRepository(IUserRepository):
    def get_by_id(self, id: Any) -> Optional[UserSummary]:
        try:
            user = (
                get_user_model()
                .objects.prefetch_related("groups")
                .filter(pk=id)
                .first()
            )
        except (TypeError, ValueError):
            return None
        return _to_summary(user) if user else None

    def get_many(self, ids: Iterable[Any]) -> Dict[Any, UserSummary]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        users = get_user_model().objects.prefetch_related("groups").filter(pk__in=wanted)
        return {user.pk: _to_summary(user) for user in users}
