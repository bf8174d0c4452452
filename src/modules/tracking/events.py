"""Domain events for the status workflow."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class StatusUpdated(DomainEvent):
    """A value was appended to one of a project's columns."""

    status_type: str = ""
    status_value: str = ""


@dataclass(frozen=True)
class ProjectCompleted(DomainEvent):
    """The CHECK column received a final value."""
