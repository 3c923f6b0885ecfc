"""API tests for the session cart."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.conf import settings
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Schedule, ScheduleItem
from apps.catalog.models import Dress, DressColor


class CartAPITests(APITestCase):
    def setUp(self) -> None:
        self.dress = Dress.objects.create(
            name="Sirène",
            price_per_day=Decimal("120.00"),
            is_rent_on_discount=True,
            new_price_per_day=Decimal("100.00"),
            is_for_sale=True,
            buy_price=Decimal("1500.00"),
            sizes=["S", "M"],
        )
        DressColor.objects.create(dress=self.dress, color_name="Ivoire")
        self.rental = {
            "item_id": str(self.dress.pk),
            "kind": "rental",
            "color": "Ivoire",
            "size": "M",
            "start_date": "2030-06-10",
            "end_date": "2030-06-13",
        }
        self.purchase = {"item_id": str(self.dress.pk), "kind": "purchase", "color": "Ivoire", "size": "S"}

    def _add(self, payload):
        return self.client.post(reverse("cart-items"), payload, format="json")

    def test_empty_cart(self):
        response = self.client.get(reverse("cart"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["total"], "0.00")
        self.assertEqual(response.data["currency"], settings.SHOP_CURRENCY)
        self.assertFalse(response.data["quote_only"])

    @override_settings(SHOP_CURRENCY="GBP")
    def test_cart_is_priced_in_the_configured_currency(self):
        self._add(self.purchase)

        response = self.client.get(reverse("cart"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["currency"], "GBP")
        self.assertEqual(response.data["total"], "1500.00")

    def test_add_items_uses_discounted_rate_and_persists_in_session(self):
        response = self._add(self.rental)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self._add(self.purchase)

        response = self.client.get(reverse("cart"))

        self.assertEqual(len(response.data["items"]), 2)
        self.assertEqual(response.data["items"][0]["unit_price"], "100.00")
        self.assertEqual(response.data["items"][0]["quantity"], 3)
        self.assertEqual(response.data["total"], "1800.00")
        stored = self.client.session[settings.CART_SESSION_KEY]
        self.assertEqual(len(stored["items"]), 2)

    def test_same_selection_merges(self):
        self._add(self.purchase)
        response = self._add(self.purchase)

        self.assertEqual(len(response.data["items"]), 1)
        self.assertEqual(response.data["items"][0]["quantity"], 2)
        self.assertEqual(response.data["total"], "3000.00")

    def test_booked_dates_are_rejected(self):
        schedule = Schedule.objects.create(
            full_name="Client",
            phone="+21620000001",
            status=Schedule.Status.CONFIRMED,
        )
        ScheduleItem.objects.create(
            schedule=schedule,
            dress=self.dress,
            dress_name=self.dress.name,
            color="Ivoire",
            quantity=2,
            start_date=date(2030, 6, 13),
            end_date=date(2030, 6, 15),
            type=ScheduleItem.Type.RENTAL,
        )

        response = self._add(self.rental)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("2030-06-13", response.data["non_field_errors"][0])
        self.assertEqual(self.client.get(reverse("cart")).data["items"], [])

    def test_incomplete_selection_reports_fields(self):
        response = self._add({"item_id": str(self.dress.pk), "kind": "purchase", "color": ""})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("color", response.data)
        self.assertIn("size", response.data)

    def test_invalid_range(self):
        response = self._add({**self.rental, "end_date": "2030-06-10"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.data)

    def test_remove_item(self):
        self._add(self.rental)
        self._add(self.purchase)

        response = self.client.delete(
            reverse("cart-items"),
            {"item_id": str(self.dress.pk), "kind": "purchase", "color": "Ivoire", "size": "S"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["kind"] for item in response.data["items"]], ["rental"])

    def test_clear(self):
        self._add(self.purchase)

        response = self.client.delete(reverse("cart"))

        self.assertEqual(response.data["items"], [])
        self.assertEqual(self.client.session[settings.CART_SESSION_KEY], {"items": []})

    def test_checkout_creates_schedule_and_clears_cart(self):
        self._add(self.rental)
        self._add(self.purchase)

        response = self.client.post(
            reverse("cart-checkout"),
            {"full_name": "Amira", "phone": "+21620000000", "try_on_date": "2030-06-01"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["total"], "1800.00")
        self.assertFalse(response.data["quote_only"])
        schedule = Schedule.objects.get(pk=response.data["id"])
        self.assertEqual(schedule.items.count(), 2)
        self.assertEqual(schedule.try_on_date, date(2030, 6, 1))
        self.assertEqual(self.client.get(reverse("cart")).data["items"], [])

    def test_checkout_empty_cart(self):
        response = self.client.post(
            reverse("cart-checkout"),
            {"full_name": "Amira", "phone": "+21620000000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Schedule.objects.exists())

    def test_checkout_keeps_cart_when_rejected(self):
        self._add(self.rental)

        response = self.client.post(
            reverse("cart-checkout"),
            {"full_name": "Amira", "phone": "+21620000000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("try_on_date", response.data)
        self.assertEqual(len(self.client.get(reverse("cart")).data["items"]), 1)
