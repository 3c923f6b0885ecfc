"""Serializers for the catalog domain."""

from __future__ import annotations

from datetime import timedelta

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Category, Dress, DressColor, DressImage, parse_sizes

DEFAULT_CALENDAR_DAYS = 30


class SizesField(serializers.Field):
    """Accepts a list, a JSON list string or a CSV string."""

    def to_internal_value(self, data):  # type: ignore
        if data is not None and not isinstance(data, (list, tuple, str)):
            raise serializers.ValidationError("Format de tailles invalide.")
        return parse_sizes(data)

    def to_representation(self, value):  # type: ignore
        return list(value or [])


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class DressImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = DressImage
        fields = ["id", "image_url", "sort_order"]


class DressColorSerializer(serializers.ModelSerializer):
    images = DressImageSerializer(many=True, read_only=True)

    class Meta:
        model = DressColor
        fields = ["id", "color_name", "images"]


class DressSerializer(serializers.ModelSerializer):
    """Fiche robe complète : catégories, couleurs et images."""

    categories = CategorySerializer(many=True, read_only=True)
    colors = DressColorSerializer(many=True, read_only=True)
    sizes = SizesField(required=False)

    class Meta:
        model = Dress
        fields = [
            "id",
            "name",
            "description",
            "new_collection",
            "price_per_day",
            "is_rent_on_discount",
            "new_price_per_day",
            "is_for_sale",
            "buy_price",
            "is_sell_on_discount",
            "new_buy_price",
            "sizes",
            "categories",
            "colors",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]


class DressWriteSerializer(serializers.ModelSerializer):
    """Création / modification d'une robe depuis l'administration."""

    sizes = SizesField(required=False)
    categories = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        many=True,
        required=False,
    )
    colors = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        write_only=True,
    )

    class Meta:
        model = Dress
        fields = [
            "name",
            "description",
            "new_collection",
            "price_per_day",
            "is_rent_on_discount",
            "new_price_per_day",
            "is_for_sale",
            "buy_price",
            "is_sell_on_discount",
            "new_buy_price",
            "sizes",
            "categories",
            "colors",
        ]

    def validate(self, attrs):  # type: ignore
        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, None)

        if current("is_rent_on_discount") and not current("new_price_per_day"):
            raise serializers.ValidationError(
                {"new_price_per_day": ["Le prix remisé est requis quand la location est en promotion."]}
            )
        if current("is_sell_on_discount") and not current("new_buy_price"):
            raise serializers.ValidationError(
                {"new_buy_price": ["Le prix remisé est requis quand la vente est en promotion."]}
            )
        if current("is_for_sale") and not current("new_collection") and not current("buy_price"):
            raise serializers.ValidationError({"buy_price": ["Le prix de vente est requis."]})
        return attrs

    def create(self, validated_data):  # type: ignore
        colors = validated_data.pop("colors", [])
        dress = super().create(validated_data)
        for name in dict.fromkeys(c.strip() for c in colors if c.strip()):
            DressColor.objects.create(dress=dress, color_name=name)
        return dress

    def update(self, instance, validated_data):  # type: ignore
        colors = validated_data.pop("colors", None)
        dress = super().update(instance, validated_data)
        if colors is not None:
            wanted = list(dict.fromkeys(c.strip() for c in colors if c.strip()))
            dress.colors.exclude(color_name__in=wanted).delete()
            existing = set(dress.colors.values_list("color_name", flat=True))
            for name in wanted:
                if name not in existing:
                    DressColor.objects.create(dress=dress, color_name=name)
        return dress

    def to_representation(self, instance):  # type: ignore
        return DressSerializer(instance, context=self.context).data


class ColorCreateSerializer(serializers.Serializer):
    color_name = serializers.CharField(max_length=100)

    def validate_color_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Le nom de la couleur est requis.")
        return value


class ImageCreateSerializer(serializers.Serializer):
    image_urls = serializers.ListField(
        child=serializers.CharField(max_length=500),
        min_length=1,
        max_length=10,
    )


class AvailabilityQuerySerializer(serializers.Serializer):
    """Calendar window; defaults to today and the following 30 days."""

    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        attrs.setdefault("start", timezone.now().date())
        attrs.setdefault("end", attrs["start"] + timedelta(days=DEFAULT_CALENDAR_DAYS))
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError("La date de fin ne peut pas précéder la date de début.")
        if (attrs["end"] - attrs["start"]).days > 366:
            raise serializers.ValidationError("La période demandée ne peut pas dépasser un an.")
        return attrs
