"""Project URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.projects.views import ProjectViewSet

router = DefaultRouter(trailing_slash=True)
router.register("projects", ProjectViewSet, basename="project")

urlpatterns = router.urls
