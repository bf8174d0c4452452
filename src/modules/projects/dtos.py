"""Project DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, ConfigDict


class ProjectStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    by_status: Dict[str, int]
    generated_at: datetime
