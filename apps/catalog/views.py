"""Catalog API views."""

from __future__ import annotations

from django.db import IntegrityError, models, transaction  # type: ignore
from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.permissions import IsStaff, IsStaffOrReadOnly

from .filters import DressFilterSet
from .models import Category, Dress, DressColor, DressImage
from .serializers import (
    AvailabilityQuerySerializer,
    CategorySerializer,
    ColorCreateSerializer,
    DressColorSerializer,
    DressImageSerializer,
    DressSerializer,
    DressWriteSerializer,
    ImageCreateSerializer,
)
from .services import dress_calendar


class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsStaffOrReadOnly]


class DressViewSet(viewsets.ModelViewSet):
    """Catalogue public des robes, géré par l'administration."""

    queryset = Dress.objects.prefetch_related("categories", "colors__images").all()
    permission_classes = [IsStaffOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = DressFilterSet
    ordering_fields = ["created_at", "price_per_day", "buy_price", "name"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return DressWriteSerializer
        if self.action == "colors":
            return ColorCreateSerializer
        return DressSerializer

    @action(detail=True, methods=["post"], permission_classes=[IsStaff])
    def colors(self, request, pk=None):  # type: ignore
        dress: Dress = self.get_object()  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                color = DressColor.objects.create(
                    dress=dress,
                    color_name=serializer.validated_data["color_name"],
                )
        except IntegrityError:
            return Response(
                {"color_name": ["Cette couleur existe déjà pour cette robe."]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(DressColorSerializer(color).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        dress: Dress = self.get_object()  # type: ignore
        today = timezone.now().date()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = dress_calendar(
            dress,
            query.validated_data["start"],
            query.validated_data["end"],
            today=today,
        )
        return Response(data)


class DressColorViewSet(mixins.DestroyModelMixin, viewsets.GenericViewSet):
    queryset = DressColor.objects.select_related("dress").all()
    serializer_class = DressColorSerializer
    permission_classes = [IsStaff]

    @action(detail=True, methods=["post"])
    def images(self, request, pk=None):  # type: ignore
        color: DressColor = self.get_object()  # type: ignore
        serializer = ImageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        last = color.images.aggregate(last=models.Max("sort_order"))["last"]
        next_order = 0 if last is None else last + 1
        created = []
        with transaction.atomic():
            for offset, url in enumerate(serializer.validated_data["image_urls"]):
                created.append(
                    DressImage.objects.create(color=color, image_url=url, sort_order=next_order + offset)
                )
        return Response(DressImageSerializer(created, many=True).data, status=status.HTTP_201_CREATED)


class DressImageViewSet(mixins.DestroyModelMixin, viewsets.GenericViewSet):
    queryset = DressImage.objects.all()
    serializer_class = DressImageSerializer
    permission_classes = [IsStaff]
