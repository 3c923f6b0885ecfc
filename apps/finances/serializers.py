"""Serializers for the finance domain (monthly revenues)."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Revenue


class RevenueSerializer(serializers.ModelSerializer):
    total_revenue = serializers.DecimalField(max_digits=13, decimal_places=2, read_only=True)

    class Meta:
        model = Revenue
        fields = [
            "id",
            "month",
            "total_sales",
            "sales_revenue",
            "total_rental",
            "rental_revenue",
            "total_revenue",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class RevenueUpsertSerializer(serializers.Serializer):
    """Saisie manuelle : le mois existant est mis à jour, sinon créé."""

    month = serializers.DateField()
    total_sales = serializers.IntegerField(min_value=0, required=False, default=0)
    sales_revenue = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False, default=Decimal("0")
    )
    total_rental = serializers.IntegerField(min_value=0, required=False, default=0)
    rental_revenue = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False, default=Decimal("0")
    )


class RecalculateSerializer(serializers.Serializer):
    month = serializers.DateField()
