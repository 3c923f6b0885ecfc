"""API tests for schedules (booking requests)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db.models.query import QuerySet
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Schedule, ScheduleItem
from apps.catalog.models import Dress, DressColor


def make_dress(name="Sirène", **fields) -> Dress:
    defaults = {
        "price_per_day": Decimal("120.00"),
        "is_for_sale": True,
        "buy_price": Decimal("1500.00"),
        "sizes": ["S", "M"],
    }
    defaults.update(fields)
    dress = Dress.objects.create(name=name, **defaults)
    DressColor.objects.create(dress=dress, color_name="Ivoire")
    return dress


def book(dress: Dress, start: date, end: date, status_value=Schedule.Status.CONFIRMED) -> Schedule:
    schedule = Schedule.objects.create(
        full_name="Client existant",
        phone="+21620000001",
        try_on_date=date(2030, 1, 1),
        status=status_value,
    )
    ScheduleItem.objects.create(
        schedule=schedule,
        dress=dress,
        dress_name=dress.name,
        color="Ivoire",
        size="M",
        quantity=(end - start).days,
        start_date=start,
        end_date=end,
        price_per_day=dress.price_per_day,
        type=ScheduleItem.Type.RENTAL,
    )
    return schedule


class ScheduleCreateAPITests(APITestCase):
    def setUp(self) -> None:
        self.dress = make_dress()
        self.new_collection = make_dress("Étoile", new_collection=True, price_per_day=None)
        self.url = reverse("schedule-list")

    def _payload(self, **overrides):
        payload = {
            "full_name": "Amira Ben Salah",
            "phone": "+21620000000",
            "try_on_date": "2030-06-01",
            "total": "1.00",
            "items": [
                {
                    "item_id": str(self.dress.pk),
                    "kind": "rental",
                    "color": "Ivoire",
                    "size": "M",
                    "start_date": "2030-06-10",
                    "end_date": "2030-06-13",
                },
                {"item_id": str(self.dress.pk), "kind": "purchase", "color": "Ivoire", "size": "S"},
                {"item_id": str(self.new_collection.pk), "kind": "quote", "color": "Ivoire"},
            ],
        }
        payload.update(overrides)
        return payload

    def test_public_create_recomputes_total(self):
        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        schedule = Schedule.objects.get(pk=response.data["id"])
        self.assertEqual(schedule.total, Decimal("1860.00"))
        self.assertEqual(schedule.status, Schedule.Status.PENDING)
        self.assertEqual(schedule.items.count(), 3)
        rental = schedule.items.get(type=ScheduleItem.Type.RENTAL)
        self.assertEqual(rental.quantity, 3)
        self.assertEqual(rental.price_per_day, Decimal("120.00"))
        self.assertEqual(rental.dress_name, "Sirène")
        self.assertIsNone(schedule.items.get(type=ScheduleItem.Type.QUOTE).price_per_day)
        self.assertEqual(response.data["total"], "1860.00")

    def test_rental_on_confirmed_dates_is_rejected(self):
        book(self.dress, date(2030, 6, 12), date(2030, 6, 15))

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("2030-06-12", response.data["non_field_errors"][0])
        self.assertFalse(Schedule.objects.filter(full_name="Amira Ben Salah").exists())

    def test_pending_schedules_do_not_block(self):
        book(self.dress, date(2030, 6, 12), date(2030, 6, 15), status_value=Schedule.Status.PENDING)

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_try_on_date_is_required_for_rentals(self):
        response = self.client.post(self.url, self._payload(try_on_date=None), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("try_on_date", response.data)

    def test_try_on_date_must_precede_rental(self):
        response = self.client.post(self.url, self._payload(try_on_date="2030-06-10"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("try_on_date", response.data)

    def test_quote_only_request(self):
        payload = self._payload(
            try_on_date=None,
            items=[{"item_id": str(self.new_collection.pk), "kind": "quote", "color": "Ivoire"}],
        )

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["is_quote_only"])
        self.assertEqual(response.data["total"], "0.00")

    def test_empty_items_rejected(self):
        response = self.client.post(self.url, self._payload(items=[]), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("items", response.data)

    def test_unknown_dress_rejected(self):
        payload = self._payload(items=[{"item_id": "999999", "kind": "quote", "color": "Ivoire"}])

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("item_id", response.data)

    def test_anonymous_cannot_list(self):
        response = self.client.get(self.url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_public_availability_lists_confirmed_windows_only(self):
        book(self.dress, date(2030, 6, 12), date(2030, 6, 15))
        book(self.new_collection, date(2030, 7, 1), date(2030, 7, 2), status_value=Schedule.Status.PENDING)

        response = self.client.get(reverse("schedule-availability"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            [
                {
                    "item_id": str(self.dress.pk),
                    "unavailable_dates": [{"start_date": "2030-06-12", "end_date": "2030-06-15"}],
                }
            ],
        )


class ScheduleAdminAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = get_user_model().objects.create_user(
            username="admin",
            password="StrongPass123",
            is_staff=True,
        )
        self.client.force_authenticate(self.staff)
        self.dress = make_dress()

    def test_list_filters_by_status(self):
        book(self.dress, date(2030, 6, 1), date(2030, 6, 3), status_value=Schedule.Status.PENDING)
        confirmed = book(self.dress, date(2030, 6, 10), date(2030, 6, 12))

        response = self.client.get(reverse("schedule-list"), {"status": "confirmed"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["id"] for row in response.data], [confirmed.pk])
        self.assertEqual(response.data[0]["items"][0]["dress_id"], self.dress.pk)

    def test_status_update(self):
        schedule = book(self.dress, date(2030, 6, 1), date(2030, 6, 3), status_value=Schedule.Status.PENDING)

        response = self.client.patch(
            reverse("schedule-set-status", args=[schedule.pk]),
            {"status": "apConfirmed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        schedule.refresh_from_db()
        self.assertEqual(schedule.status, Schedule.Status.APPOINTMENT_CONFIRMED)

    def test_confirming_an_overlapping_schedule_is_rejected(self):
        book(self.dress, date(2030, 6, 1), date(2030, 6, 5))
        pending = book(self.dress, date(2030, 6, 5), date(2030, 6, 8), status_value=Schedule.Status.PENDING)

        response = self.client.patch(
            reverse("schedule-set-status", args=[pending.pk]),
            {"status": "confirmed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        pending.refresh_from_db()
        self.assertEqual(pending.status, Schedule.Status.PENDING)

    def test_confirming_locks_the_rented_dresses(self):
        other = make_dress("Étoile")
        pending = book(self.dress, date(2030, 6, 5), date(2030, 6, 8), status_value=Schedule.Status.PENDING)
        ScheduleItem.objects.create(
            schedule=pending,
            dress=other,
            dress_name=other.name,
            color="Ivoire",
            quantity=2,
            start_date=date(2030, 6, 5),
            end_date=date(2030, 6, 7),
            price_per_day=other.price_per_day,
            type=ScheduleItem.Type.RENTAL,
        )
        locked = []
        original = QuerySet.select_for_update

        def record_lock(queryset, *args, **kwargs):
            locked.append(queryset.model)
            return original(queryset, *args, **kwargs)

        with mock.patch.object(QuerySet, "select_for_update", autospec=True, side_effect=record_lock):
            response = self.client.patch(
                reverse("schedule-set-status", args=[pending.pk]),
                {"status": "confirmed"},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(locked, [Schedule, Dress])

    def test_invalid_status_rejected(self):
        schedule = book(self.dress, date(2030, 6, 1), date(2030, 6, 3))

        response = self.client.patch(
            reverse("schedule-set-status", args=[schedule.pk]),
            {"status": "archived"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete(self):
        schedule = book(self.dress, date(2030, 6, 1), date(2030, 6, 3))

        response = self.client.delete(reverse("schedule-detail", args=[schedule.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Schedule.objects.filter(pk=schedule.pk).exists())
        self.assertFalse(ScheduleItem.objects.filter(schedule_id=schedule.pk).exists())
