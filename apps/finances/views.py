"""API views for monthly revenues (back-office only)."""

from __future__ import annotations

import logging
from datetime import date

from django.http import HttpResponse  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.permissions import IsStaff

from .models import Revenue
from .serializers import RecalculateSerializer, RevenueSerializer, RevenueUpsertSerializer
from .services import export_revenues_xlsx, month_start, recalculate_month, revenue_summary, upsert_revenue

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class RevenueViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Revenue.objects.all()
    serializer_class = RevenueSerializer
    permission_classes = [IsStaff]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return RevenueUpsertSerializer
        if self.action == "recalculate":
            return RecalculateSerializer
        return RevenueSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        revenue, created = upsert_revenue(data.pop("month"), **data)
        logger.info("Revenue %s %s manually", revenue.month, "created" if created else "updated")
        return Response(
            RevenueSerializer(revenue).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(detail=False, methods=["get"], url_path=r"month/(?P<month>\d{4}-\d{2}-\d{2})")
    def by_month(self, request, month=None):  # type: ignore
        try:
            day = date.fromisoformat(month)
        except ValueError:
            return Response({"detail": "Mois invalide."}, status=status.HTTP_400_BAD_REQUEST)
        revenue = get_object_or_404(Revenue, month=month_start(day))
        return Response(RevenueSerializer(revenue).data)

    @action(detail=False, methods=["get"])
    def summary(self, request):  # type: ignore
        return Response(revenue_summary(self.get_queryset()))

    @action(detail=False, methods=["get"])
    def export(self, request):  # type: ignore
        content = export_revenues_xlsx(self.get_queryset())
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = 'attachment; filename="revenus.xlsx"'
        return response

    @action(detail=False, methods=["post"])
    def recalculate(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        revenue = recalculate_month(serializer.validated_data["month"])
        return Response(RevenueSerializer(revenue).data)
