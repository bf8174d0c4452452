"""Material URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.materials.views import MaterialViewSet

router = DefaultRouter(trailing_slash=True)
router.register("materials", MaterialViewSet, basename="material")

urlpatterns = router.urls
