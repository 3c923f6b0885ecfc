"""URL routing for storefront content."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AboutImageViewSet, BannerViewSet, ContactViewSet

router = SimpleRouter()
router.register(r"contacts", ContactViewSet, basename="contact")
router.register(r"banners", BannerViewSet, basename="banner")
router.register(r"about-images", AboutImageViewSet, basename="about-image")

urlpatterns = [
    path("", include(router.urls)),
]
