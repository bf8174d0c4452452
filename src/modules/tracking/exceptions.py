"""Status workflow exceptions."""

from __future__ import annotations

from modules.core import exceptions as kinds


class StatusValidationError(kinds.ValidationError):
    """A column value or its additional data failed validation."""


class StatusPermissionDenied(kinds.Forbidden):
    """Only warehouse staff or administrators may write status columns."""
