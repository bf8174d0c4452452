from django.apps import AppConfig


class TrackingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.tracking"
    label = "tracking"

    def ready(self) -> None:
        from modules.tracking.events import ProjectCompleted, StatusUpdated
        from modules.tracking.handlers import (
            project_completed_handler,
            status_updated_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(StatusUpdated, status_updated_handler)
        event_bus.subscribe(ProjectCompleted, project_completed_handler)
