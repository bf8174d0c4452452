"""Material and inventory domain exceptions.

Each exception subclasses one of the kinds in ``modules.core.exceptions``
so the API layer can map it to an HTTP status without knowing about it.
"""

from __future__ import annotations

from modules.core import exceptions as kinds


class MaterialNotFound(kinds.NotFound):
    """The referenced material does not exist."""


class InsufficientStock(kinds.InsufficientStock):
    """Requested quantity exceeds the material's available stock."""


class WrongMaterialType(kinds.WrongMaterialType):
    """The material's type does not match the order kind."""


class InvalidQuantity(kinds.ValidationError):
    """A ledger quantity is out of range."""


class InvalidMaterial(kinds.ValidationError):
    """Material attributes failed validation."""


class MaterialInUse(kinds.InvalidState):
    """The material is referenced by order lines and cannot be deleted."""


class CatalogPermissionDenied(kinds.Forbidden):
    """The actor may not modify the material catalog."""
