"""Serializers for storefront content."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AboutImage, Banner, Contact


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = ["id", "name", "email", "phone", "subject", "message", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Le nom est requis.")
        return value

    def validate_message(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Le message est requis.")
        return value


class BannerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Banner
        fields = ["id", "image_url", "sort_order", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]


class AboutImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = AboutImage
        fields = ["id", "image_url", "sort_order", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]
