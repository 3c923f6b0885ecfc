"""URL routing for the session cart."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import CartItemsView, CartView, CheckoutView

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("checkout/", CheckoutView.as_view(), name="cart-checkout"),
]
