"""Cross-module DTOs (pagination envelope)."""

from __future__ import annotations

import math
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_SIZE = 100


class Page(BaseModel):
    """One page of a listing plus the total row count.

    ``items`` holds domain entities (Django model instances), hence
    ``arbitrary_types_allowed``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: List[Any]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


def clamp_paging(page: int, limit: int) -> tuple[int, int]:
    """Force ``page >= 1`` and ``1 <= limit <= MAX_PAGE_SIZE``."""
    return max(page, 1), max(1, min(limit, MAX_PAGE_SIZE))


def page_bounds(page: int, limit: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice for a 1-based page."""
    page, limit = clamp_paging(page, limit)
    start = (page - 1) * limit
    return start, start + limit
