"""URL routing for schedules (booking requests)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ScheduleViewSet

router = DefaultRouter()
router.register(r"", ScheduleViewSet, basename="schedule")

urlpatterns = [
    path("", include(router.urls)),
]
