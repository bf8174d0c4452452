"""Material repository interface.

Extends ``IRepository[Material]`` with the row lock the ledger needs
and the distinct-value look-ups used by the catalog.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.materials.models import Material


class IMaterialRepository(IRepository["Material"]):
    """Repository contract for materials.

    Supported ``list`` filter keys: ``type``, ``category``, ``supplier``
    and ``search`` (case-insensitive match on name or category).
    Listings are newest first.
    """

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional[Material]:
        """Retrieve a material holding a row lock until the transaction ends."""

    @abstractmethod
    def get_many(self, ids: List[Any]) -> List[Material]:
        """Batch look-up; unknown ids are skipped."""

    @abstractmethod
    def categories(self, type: Optional[str] = None) -> List[str]:
        """Distinct categories, sorted."""

    @abstractmethod
    def suppliers(self, type: Optional[str] = None) -> List[str]:
        """Distinct non-empty suppliers, sorted."""

    @abstractmethod
    def is_referenced(self, id: Any) -> bool:
        """``True`` when an order line points at the material."""
