"""Serializers for the session cart."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import CustomerSerializer, SelectionSerializer
from apps.cart.domain.cart import VariantKind


class AddItemSerializer(SelectionSerializer):
    """Sélection faite sur la fiche robe."""


class RemoveItemSerializer(serializers.Serializer):
    item_id = serializers.CharField(max_length=50)
    kind = serializers.ChoiceField(choices=[k.value for k in VariantKind])
    color = serializers.CharField(max_length=100)
    size = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class CheckoutSerializer(CustomerSerializer):
    """Coordonnées saisies au moment de valider le panier."""
