"""API views for storefront content."""

from __future__ import annotations

import logging

from rest_framework import mixins, viewsets  # type: ignore

from shared.infrastructure.permissions import IsStaffOrCreateOnly, IsStaffOrReadOnly

from .filters import AboutImageFilterSet, BannerFilterSet
from .models import AboutImage, Banner, Contact
from .serializers import AboutImageSerializer, BannerSerializer, ContactSerializer

logger = logging.getLogger(__name__)


class ContactViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Formulaire de contact : envoi public, lecture par l'administration."""

    queryset = Contact.objects.all()
    serializer_class = ContactSerializer
    permission_classes = [IsStaffOrCreateOnly]

    def perform_create(self, serializer):  # type: ignore
        contact = serializer.save()
        logger.info("Contact message %s received from %s", contact.pk, contact.email)


class BannerViewSet(viewsets.ModelViewSet):
    queryset = Banner.objects.all()
    serializer_class = BannerSerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_class = BannerFilterSet


class AboutImageViewSet(viewsets.ModelViewSet):
    queryset = AboutImage.objects.all()
    serializer_class = AboutImageSerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_class = AboutImageFilterSet
