"""Project domain exceptions."""

from __future__ import annotations

from modules.core import exceptions as kinds


class ProjectNotFound(kinds.NotFound):
    """The referenced project does not exist."""


class ProjectAlreadyExists(kinds.AlreadyExists):
    """The order already has a tracking project."""


class InvalidProjectName(kinds.ValidationError):
    """Project name is empty or too long."""
