"""API views for schedules (booking requests)."""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.cart.domain.exceptions import SelectionError
from apps.cart.services import lines_from_selections
from shared.application.uow import DjangoUnitOfWork
from shared.infrastructure.permissions import IsStaffOrCreateOnly

from .application.command_handlers import (
    ChangeScheduleStatusCommand,
    ChangeScheduleStatusHandler,
    SubmitBookingRequestCommand,
    SubmitBookingRequestHandler,
)
from .domain.entities import CustomerDetails
from .domain.events import ScheduleDeleted
from .models import Schedule
from .serializers import ScheduleCreateSerializer, ScheduleSerializer, ScheduleStatusSerializer
from .services import confirmed_booking_windows

logger = logging.getLogger(__name__)


class ScheduleViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Rendez-vous : création publique, gestion réservée à l'administration."""

    queryset = Schedule.objects.prefetch_related("items").all()
    permission_classes = [IsStaffOrCreateOnly]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ScheduleCreateSerializer
        if self.action == "set_status":
            return ScheduleStatusSerializer
        return ScheduleSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        status_filter = self.request.query_params.get("status")
        if self.action == "list" and status_filter:
            qs = qs.filter(status=status_filter)
        return qs

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            lines = lines_from_selections(data["items"])
            schedule = SubmitBookingRequestHandler().handle(
                SubmitBookingRequestCommand(
                    customer=CustomerDetails(
                        full_name=data["full_name"],
                        phone=data["phone"],
                        address=data["address"],
                        note=data["note"],
                    ),
                    lines=tuple(lines),
                    try_on_date=data["try_on_date"],
                )
            )
        except SelectionError as exc:
            raise serializers.ValidationError(exc.as_errors())
        read_serializer = ScheduleSerializer(schedule, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):  # type: ignore
        schedule = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            ChangeScheduleStatusHandler().handle(
                ChangeScheduleStatusCommand(
                    schedule_id=schedule.pk,
                    status=serializer.validated_data["status"],
                )
            )
        except SelectionError as exc:
            raise serializers.ValidationError(exc.as_errors())
        schedule = self.get_queryset().get(pk=schedule.pk)
        return Response(ScheduleSerializer(schedule, context=self.get_serializer_context()).data)

    @action(
        detail=False,
        methods=["get"],
        permission_classes=[permissions.AllowAny],
        pagination_class=None,
    )
    def availability(self, request):  # type: ignore
        """Booked intervals of every dress, from confirmed schedules."""
        return Response([window.to_dict() for window in confirmed_booking_windows()])

    def perform_destroy(self, instance):  # type: ignore
        event = ScheduleDeleted(
            schedule_id=instance.pk,
            status=instance.status,
            try_on_date=instance.try_on_date,
            revenue_date=instance.revenue_date,
        )
        with DjangoUnitOfWork() as uow:
            instance.delete()
            uow.record(event)
        logger.info("Schedule %s deleted (status %s)", event.schedule_id, event.status)
