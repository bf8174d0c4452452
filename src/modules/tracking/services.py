"""Status workflow service layer.

Owns the four-column state machine of a project:

- ``append`` validates a column write, checks the author, stores a new
  row and flips the project to COMPLETED when CHECK gets a value.
- ``initialize`` writes one of the spawn presets without validation.
- ``latest`` / ``history`` / ``summary`` are read-only and open to
  every role.

Every write runs inside the injected unit of work.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

import structlog

from modules.accounts.exceptions import UserNotFound
from modules.projects.constants import ProjectStatus
from modules.projects.exceptions import ProjectNotFound
from modules.tracking.constants import COLUMNS, StatusType
from modules.tracking.dtos import StatusHistoryEntry, StatusSummary
from modules.tracking.events import ProjectCompleted, StatusUpdated
from modules.tracking.exceptions import StatusPermissionDenied
from modules.tracking.models import StatusUpdate
from modules.tracking.rules import can_write_status, validate_status
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.accounts.actors import Actor
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.core.repositories.interfaces import IUnitOfWork
    from modules.projects.models import Project
    from modules.projects.repositories.interfaces import IProjectRepository
    from modules.tracking.repositories.interfaces import IStatusUpdateRepository

logger = structlog.get_logger(__name__)


class StatusWorkflowService:
    def __init__(
        self,
        status_update_repository: IStatusUpdateRepository,
        project_repository: IProjectRepository,
        user_repository: IUserRepository,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._status_repo = status_update_repository
        self._project_repo = project_repository
        self._user_repo = user_repository
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def append(
        self,
        project_id: Any,
        actor: Actor,
        status_type: str,
        status_value: str,
        additional_data: Optional[Mapping[str, Any]] = None,
    ) -> StatusUpdate:
        """Append a value to one column of a project.

        Raises:
            StatusPermissionDenied: actor is neither WAREHOUSE nor ADMIN.
            StatusValidationError: value or additional data rejected.
            ProjectNotFound: project does not exist.
            UserNotFound: actor does not resolve to a user.
        """
        log = logger.bind(
            project_id=str(project_id), status_type=status_type, actor_id=actor.id
        )
        if not can_write_status(actor.role):
            log.warning("status.permission_denied", role=actor.role)
            raise StatusPermissionDenied(
                "Only warehouse staff or administrators may update status.",
                role=actor.role,
            )
        data = validate_status(status_type, status_value, additional_data)

        with self._uow.atomic():
            project = self._project_repo.get_for_update(project_id)
            if project is None:
                raise ProjectNotFound(
                    f"Project {project_id} not found.", project_id=str(project_id)
                )
            if self._user_repo.get_by_id(actor.id) is None:
                raise UserNotFound(f"User {actor.id} not found.", user_id=actor.id)

            update = self._status_repo.add(
                StatusUpdate(
                    project_id=project.id,
                    author_id=actor.id,
                    author_role=actor.role,
                    status_type=status_type,
                    status_value=status_value,
                    additional_data=data,
                )
            )
            self._publish(
                StatusUpdated(
                    aggregate_id=project.id,
                    status_type=status_type,
                    status_value=status_value,
                )
            )

            if status_type == StatusType.CHECK and status_value:
                self._complete(project)

        log.info("status.appended", status_value=status_value, update_id=str(update.id))
        return update

    def initialize(
        self, project: Project, preset: Mapping[str, str], author: Actor
    ) -> List[StatusUpdate]:
        """Write one row per column from *preset*, bypassing validation."""
        rows = []
        with self._uow.atomic():
            for column in COLUMNS:
                rows.append(
                    self._status_repo.add(
                        StatusUpdate(
                            project_id=project.id,
                            author_id=author.id,
                            author_role=author.role,
                            status_type=column,
                            status_value=preset.get(column, ""),
                        )
                    )
                )
        logger.info(
            "status.initialized",
            project_id=str(project.id),
            preset={str(k): v for k, v in preset.items()},
        )
        return rows

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def latest(self, project_id: Any) -> Dict[str, Optional[StatusUpdate]]:
        self._get_project(project_id)
        return self._status_repo.latest(project_id)

    def history(self, project_id: Any) -> List[StatusHistoryEntry]:
        """Full log, oldest first, joined with author username and role."""
        project = self._get_project(project_id)
        updates = self._status_repo.for_project(project.id)
        authors = self._user_repo.get_many({u.author_id for u in updates})
        entries = []
        for update in updates:
            author = authors.get(update.author_id)
            entries.append(
                StatusHistoryEntry(
                    id=update.id,
                    project_id=update.project_id,
                    status_type=update.status_type,
                    status_value=update.status_value,
                    additional_data=update.additional_data,
                    author_id=update.author_id,
                    author_username=author.username if author else None,
                    author_role=update.author_role,
                    created_at=update.created_at,
                )
            )
        return entries

    def summary(self, project_id: Any) -> StatusSummary:
        project = self._get_project(project_id)
        latest = self._status_repo.latest(project.id)
        values = {
            str(column).lower(): (row.status_value if row else "")
            for column, row in latest.items()
        }
        return StatusSummary(
            project_id=project.id,
            overall_status=project.overall_status,
            completed=project.is_completed,
            **values,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_project(self, project_id: Any) -> Project:
        project = self._project_repo.get_by_id(project_id)
        if project is None:
            raise ProjectNotFound(
                f"Project {project_id} not found.", project_id=str(project_id)
            )
        return project

    def _complete(self, project: Project) -> None:
        if project.overall_status != ProjectStatus.ACTIVE:
            return
        project.overall_status = ProjectStatus.COMPLETED
        self._project_repo.save(project)
        self._publish(ProjectCompleted(aggregate_id=project.id))
        logger.info("project.completed", project_id=str(project.id))

    def _publish(self, event: Any) -> None:
        self._uow.on_commit(partial(event_bus.publish, event))
