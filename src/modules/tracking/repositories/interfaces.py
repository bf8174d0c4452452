"""Status update repository interface.

Append-only: there is no update; ``delete_for_project`` exists only for
the administrative order delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from modules.tracking.models import StatusUpdate


class IStatusUpdateRepository(ABC):
    @abstractmethod
    def add(self, update: StatusUpdate) -> StatusUpdate:
        """Append a new row."""

    @abstractmethod
    def for_project(self, project_id: Any) -> List[StatusUpdate]:
        """Every row of a project, oldest first (insertion order on ties)."""

    @abstractmethod
    def latest(self, project_id: Any) -> Dict[str, Optional[StatusUpdate]]:
        """Newest row per status type; every column key is present."""

    @abstractmethod
    def delete_for_project(self, project_id: Any) -> int:
        """Remove every row of a project; returns the count."""
