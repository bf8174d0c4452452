"""Project repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.projects.models import Project


class IProjectRepository(IRepository["Project"]):
    """Repository contract for projects.

    ``create`` must refuse a second project for the same order even if a
    concurrent caller slipped past the service-level check.  Supported
    ``list`` filter keys: ``overall_status``, ``order_id``.
    """

    @abstractmethod
    def create(self, project: Project) -> Project:
        """Insert a new project.

        Raises:
            ProjectAlreadyExists: the order already has one.
        """

    @abstractmethod
    def get_by_order(self, order_id: Any) -> Optional[Project]:
        """The project of an order, or ``None``."""

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional[Project]:
        """Retrieve a project holding a row lock."""

    @abstractmethod
    def delete_for_order(self, order_id: Any) -> bool:
        """Remove the project of an order, if any."""

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        """Number of projects per overall status."""
