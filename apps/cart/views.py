"""Cart API views.

The cart lives in the visitor's session; every endpoint answers with the
cart snapshot so the storefront can re-render from a single payload.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import permissions, serializers, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.domain.entities import CustomerDetails

from .domain.cart import Cart
from .domain.exceptions import SelectionError
from .serializers import AddItemSerializer, CheckoutSerializer, RemoveItemSerializer
from .services import checkout, get_session_cart, lines_from_selections


def cart_payload(cart: Cart) -> dict:
    return cart.snapshot(
        currency=getattr(settings, "SHOP_CURRENCY", "TND"),
        decimals=getattr(settings, "SHOP_DECIMALS", 2),
    )


class CartView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        return Response(cart_payload(get_session_cart(request)))

    def delete(self, request):  # type: ignore
        cart = get_session_cart(request)
        cart.clear()
        return Response(cart_payload(cart))


class CartItemsView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = get_session_cart(request)
        try:
            (line,) = lines_from_selections([serializer.validated_data])
        except SelectionError as exc:
            raise serializers.ValidationError(exc.as_errors())
        cart.add_item(line)
        return Response(cart_payload(cart), status=status.HTTP_201_CREATED)

    def delete(self, request):  # type: ignore
        serializer = RemoveItemSerializer(data=request.data or request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        cart = get_session_cart(request)
        cart.remove_item(data["item_id"], data["kind"], data["color"], data["size"])
        return Response(cart_payload(cart))


class CheckoutView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        cart = get_session_cart(request)
        try:
            schedule = checkout(
                cart,
                CustomerDetails(
                    full_name=data["full_name"],
                    phone=data["phone"],
                    address=data["address"],
                    note=data["note"],
                ),
                try_on_date=data["try_on_date"],
            )
        except SelectionError as exc:
            raise serializers.ValidationError(exc.as_errors())
        return Response(
            {
                "id": schedule.pk,
                "total": str(schedule.total),
                "quote_only": schedule.is_quote_only,
            },
            status=status.HTTP_201_CREATED,
        )
