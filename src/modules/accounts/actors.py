"""Caller identity passed explicitly into every core operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from modules.accounts.constants import ROLE_PRECEDENCE, Role


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation: a user id plus a resolved role."""

    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, owner_id: Any) -> bool:
        return owner_id is not None and str(owner_id) == str(self.id)


def resolve_role(group_names: Iterable[str], is_superuser: bool = False) -> str:
    """Pick the effective role for a set of group names."""
    if is_superuser:
        return Role.ADMIN
    names = set(group_names)
    for role in ROLE_PRECEDENCE:
        if role in names:
            return role
    return Role.USER


def role_for_user(user: Any) -> str:
    return resolve_role(
        user.groups.values_list("name", flat=True),
        is_superuser=getattr(user, "is_superuser", False),
    )


def actor_from_user(user: Any) -> Actor:
    """Build an ``Actor`` from an authenticated Django user."""
    return Actor(id=user.pk, role=role_for_user(user))


__all__ = ["Actor", "actor_from_user", "resolve_role", "role_for_user"]
