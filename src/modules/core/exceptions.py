"""Domain error taxonomy shared by every module.

Services raise subclasses of these kinds; module-level ``exceptions.py``
files only specialise them (``MaterialNotFound(NotFound)``, ...).  The
API layer maps ``kind`` to a transport status in
``modules.core.exception_handler`` and never needs to know the concrete
class.
"""

from __future__ import annotations

from typing import Any, Dict


class DomainError(Exception):
    """Base class for every business-rule failure.

    ``context`` carries the identifiers needed to build a precise message
    (material id, missing field, current status, ...).
    """

    kind = "DomainError"

    def __init__(self, message: str = "", **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def __str__(self) -> str:
        return self.message or self.kind


class NotFound(DomainError):
    """A referenced material, order, project or user does not exist."""

    kind = "NotFound"


class Forbidden(DomainError):
    """The actor lacks permission or does not own the resource."""

    kind = "Forbidden"


class InvalidState(DomainError):
    """The operation is not valid for the entity's lifecycle state."""

    kind = "InvalidState"


class WrongMaterialType(DomainError):
    """A line item's material type does not match the order flavor."""

    kind = "WrongMaterialType"


class InsufficientStock(DomainError):
    """Requested quantity exceeds available inventory."""

    kind = "InsufficientStock"


class ValidationError(DomainError):
    """Malformed input: bad status value, missing field, oversized name."""

    kind = "ValidationError"


class AlreadyExists(DomainError):
    """Duplicate creation, e.g. a second project for the same order."""

    kind = "AlreadyExists"
