"""Status workflow DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AppendStatusDTO(BaseModel):
    """Input for ``StatusWorkflowService.append``."""

    model_config = ConfigDict(frozen=True)

    status_type: str
    status_value: str = ""
    additional_data: Optional[Dict[str, Any]] = None


class StatusHistoryEntry(BaseModel):
    """A status update joined with its author for audit display."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    project_id: UUID
    status_type: str
    status_value: str
    additional_data: Optional[Dict[str, Any]] = None
    author_id: Optional[int] = None
    author_username: Optional[str] = None
    author_role: str
    created_at: datetime


class StatusSummary(BaseModel):
    """Current value of every column plus the completion flag."""

    model_config = ConfigDict(frozen=True)

    project_id: UUID
    order: str = ""
    pickup: str = ""
    delivery: str = ""
    check: str = ""
    overall_status: str
    completed: bool
