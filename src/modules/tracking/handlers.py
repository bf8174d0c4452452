"""Event handlers for status workflow events."""

from __future__ import annotations

import structlog

from modules.tracking.events import ProjectCompleted, StatusUpdated
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class StatusUpdatedHandler(IEventHandler[StatusUpdated]):
    def handle(self, event: StatusUpdated) -> None:
        logger.info("event.status_updated", **event.log_fields())


class ProjectCompletedHandler(IEventHandler[ProjectCompleted]):
    def handle(self, event: ProjectCompleted) -> None:
        logger.info("event.project_completed", **event.log_fields())


status_updated_handler = StatusUpdatedHandler()
project_completed_handler = ProjectCompletedHandler()
