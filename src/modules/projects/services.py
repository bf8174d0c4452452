"""Project service layer (ProjectSpawner).

Every order gets exactly one tracking project.  ``ensure_for_order`` is
the idempotent entry point used by order creation and confirmation;
``create`` is the strict variant that refuses duplicates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import structlog
from django.utils import timezone

from modules.core.dtos import Page, clamp_paging
from modules.orders.exceptions import OrderNotFound
from modules.projects.constants import (
    PROJECT_NAME_MAX_LENGTH,
    PROJECT_NAME_PREFIXES,
    ProjectStatus,
)
from modules.projects.dtos import ProjectStatistics
from modules.projects.exceptions import (
    InvalidProjectName,
    ProjectAlreadyExists,
    ProjectNotFound,
)
from modules.projects.models import Project

if TYPE_CHECKING:
    from modules.accounts.actors import Actor
    from modules.core.repositories.interfaces import IUnitOfWork
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.projects.repositories.interfaces import IProjectRepository
    from modules.tracking.repositories.interfaces import IStatusUpdateRepository
    from modules.tracking.services import StatusWorkflowService

logger = structlog.get_logger(__name__)


def project_name_for(order: Order) -> str:
    """``<kind prefix>-<YYYY-MM-DD>-<first 8 chars of the order id>``."""
    prefix = PROJECT_NAME_PREFIXES.get(order.kind, PROJECT_NAME_PREFIXES["GENERAL"])
    day = timezone.localdate(order.created_at) if order.created_at else timezone.localdate()
    return f"{prefix}-{day.isoformat()}-{str(order.id)[:8]}"


class ProjectService:
    def __init__(
        self,
        project_repository: IProjectRepository,
        order_repository: IOrderRepository,
        status_update_repository: IStatusUpdateRepository,
        workflow: StatusWorkflowService,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._project_repo = project_repository
        self._order_repo = order_repository
        self._status_repo = status_update_repository
        self._workflow = workflow
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, order_id: Any, project_name: str) -> Project:
        """Create the project of an order.

        Raises:
            InvalidProjectName: name empty or longer than 255 characters.
            OrderNotFound: no such order.
            ProjectAlreadyExists: the order already has a project.
        """
        name = (project_name or "").strip()
        if not name or len(name) > PROJECT_NAME_MAX_LENGTH:
            raise InvalidProjectName(
                f"Project name must be 1 to {PROJECT_NAME_MAX_LENGTH} characters.",
                field="project_name",
            )
        with self._uow.atomic():
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(f"Order {order_id} not found.", order_id=str(order_id))
            if self._project_repo.get_by_order(order.id) is not None:
                raise ProjectAlreadyExists(
                    f"Order {order.id} already has a project.", order_id=str(order.id)
                )
            project = self._project_repo.create(
                Project(order_id=order.id, project_name=name)
            )
        logger.info(
            "project.created",
            project_id=str(project.id),
            order_id=str(order.id),
            project_name=name,
        )
        return project

    def ensure_for_order(
        self, order: Order, preset: Mapping[str, str], author: Actor
    ) -> Project:
        """Return the order's project, spawning and initializing it if missing."""
        with self._uow.atomic():
            existing = self._project_repo.get_by_order(order.id)
            if existing is not None:
                return existing
            project = self.create(order.id, project_name_for(order))
            self._workflow.initialize(project, preset, author)
        return project

    def cancel_for_order(self, order_id: Any) -> Optional[Project]:
        with self._uow.atomic():
            project = self._project_repo.get_by_order(order_id)
            if project is None:
                return None
            project.overall_status = ProjectStatus.CANCELLED
            self._project_repo.save(project)
        logger.info("project.cancelled", project_id=str(project.id), order_id=str(order_id))
        return project

    def delete_for_order(self, order_id: Any) -> bool:
        """Remove the order's project and its whole status log."""
        with self._uow.atomic():
            project = self._project_repo.get_by_order(order_id)
            if project is None:
                return False
            removed = self._status_repo.delete_for_project(project.id)
            self._project_repo.delete(project.id)
        logger.info(
            "project.deleted",
            project_id=str(project.id),
            order_id=str(order_id),
            status_updates=removed,
        )
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_project(self, project_id: Any) -> Project:
        project = self._project_repo.get_by_id(project_id)
        if project is None:
            raise ProjectNotFound(
                f"Project {project_id} not found.", project_id=str(project_id)
            )
        return project

    def find_by_order(self, order_id: Any) -> Optional[Project]:
        return self._project_repo.get_by_order(order_id)

    def get_by_order(self, order_id: Any) -> Project:
        project = self._project_repo.get_by_order(order_id)
        if project is None:
            raise ProjectNotFound(
                f"No project for order {order_id}.", order_id=str(order_id)
            )
        return project

    def list_projects(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page:
        page, limit = clamp_paging(page, limit)
        items, total = self._project_repo.list(filters, page, limit)
        return Page(items=items, total=total, page=page, limit=limit)

    def statistics(self) -> ProjectStatistics:
        counts = self._project_repo.count_by_status()
        by_status = {status: counts.get(status, 0) for status in ProjectStatus.values}
        return ProjectStatistics(
            total=sum(by_status.values()),
            by_status=by_status,
            generated_at=timezone.now(),
        )
