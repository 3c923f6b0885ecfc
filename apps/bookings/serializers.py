"""Serializers for schedules (booking requests)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.cart.domain.cart import VariantKind

from .models import Schedule, ScheduleItem


class ScheduleItemSerializer(serializers.ModelSerializer):
    dress_id = serializers.ReadOnlyField()
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = ScheduleItem
        fields = [
            "id",
            "dress_id",
            "dress_name",
            "type",
            "color",
            "size",
            "quantity",
            "start_date",
            "end_date",
            "price_per_day",
            "buy_price",
            "line_total",
        ]

    def get_line_total(self, obj: ScheduleItem) -> str:
        return str(obj.line_total())


class ScheduleSerializer(serializers.ModelSerializer):
    """Rendez-vous avec ses articles."""

    items = ScheduleItemSerializer(many=True, read_only=True)
    is_quote_only = serializers.BooleanField(read_only=True)

    class Meta:
        model = Schedule
        fields = [
            "id",
            "full_name",
            "phone",
            "address",
            "note",
            "try_on_date",
            "total",
            "status",
            "is_quote_only",
            "items",
            "created_at",
            "updated_at",
        ]


class SelectionSerializer(serializers.Serializer):
    """One dress selection as sent by the storefront."""

    item_id = serializers.CharField(max_length=50)
    kind = serializers.ChoiceField(choices=[k.value for k in VariantKind])
    color = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    size = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    start_date = serializers.DateField(required=False, allow_null=True, default=None)
    end_date = serializers.DateField(required=False, allow_null=True, default=None)


class CustomerSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=30)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True, default="")
    note = serializers.CharField(required=False, allow_blank=True, default="")
    try_on_date = serializers.DateField(required=False, allow_null=True, default=None)

    def validate_full_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Le nom complet est requis.")
        return value

    def validate_phone(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Le téléphone est requis.")
        return value


class ScheduleCreateSerializer(CustomerSerializer):
    """Demande publique : coordonnées + articles. Le total envoyé est ignoré."""

    items = SelectionSerializer(many=True, allow_empty=False)


class ScheduleStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Schedule.Status.choices)
