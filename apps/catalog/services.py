"""Catalog services: read models for the cart and the public calendar."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from django.utils import timezone  # type: ignore

from apps.bookings.domain.availability import disabled_dates, is_date_available
from apps.bookings.services import confirmed_booking_windows
from apps.cart.domain.exceptions import UnknownItemError
from apps.catalog.domain.items import CatalogItem
from shared.domain.value_objects import DateRange

from .models import Dress


def load_catalog_items(item_ids: Iterable) -> dict[str, CatalogItem]:
    """Read models keyed by the string id; unknown ids raise UnknownItemError."""

    wanted: dict[str, int] = {}
    for item_id in item_ids:
        try:
            wanted[str(item_id)] = int(item_id)
        except (TypeError, ValueError):
            raise UnknownItemError(item_id)

    dresses = Dress.objects.prefetch_related("colors").in_bulk(set(wanted.values()))
    items: dict[str, CatalogItem] = {}
    for key, pk in wanted.items():
        dress = dresses.get(pk)
        if dress is None:
            raise UnknownItemError(key)
        items[key] = CatalogItem.from_model(dress)
    return items


def dress_calendar(dress: Dress, start: date, end: date, today: date | None = None) -> dict:
    """Per-day availability of one dress over [start, end]."""

    today = today or timezone.now().date()
    windows = confirmed_booking_windows([dress.pk])
    return {
        "dress_id": dress.pk,
        "start": start.isoformat(),
        "end": end.isoformat(),
        "days": [
            {"date": day.isoformat(), "available": is_date_available(dress.pk, day, windows)}
            for day in DateRange(start, end).days()
        ],
        "disabled_dates": [
            day.isoformat() for day in disabled_dates(dress.pk, start, end, windows, today=today)
        ],
    }
