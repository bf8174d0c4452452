"""Account DTOs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Immutable view of a user as the workflow needs it."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: str
