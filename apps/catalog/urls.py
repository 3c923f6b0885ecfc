"""URL routing for the dress catalog."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CategoryViewSet, DressColorViewSet, DressImageViewSet, DressViewSet

router = DefaultRouter()
router.register(r"categories", CategoryViewSet, basename="category")
# Registered before "dresses" so "colors"/"images" are never taken for a dress id.
router.register(r"dresses/colors", DressColorViewSet, basename="dress-color")
router.register(r"dresses/images", DressImageViewSet, basename="dress-image")
router.register(r"dresses", DressViewSet, basename="dress")

urlpatterns = [
    path("", include(router.urls)),
]
