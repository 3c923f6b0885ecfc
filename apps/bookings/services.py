"""Services bridging schedule rows and the availability engine."""

from __future__ import annotations

from typing import Iterable

from apps.bookings.domain.availability import BookingWindow, build_booking_windows

from .models import Schedule

# Only confirmed schedules commit a dress for their rental dates.
BLOCKING_STATUSES: tuple[str, ...] = (Schedule.Status.CONFIRMED,)


def schedule_as_booking(schedule: Schedule) -> dict:
    """Plain mapping consumed by build_booking_windows()."""

    return {
        "id": schedule.pk,
        "status": schedule.status,
        "items": [
            {
                "type": item.type,
                "item_id": item.dress_id,
                "start_date": item.start_date,
                "end_date": item.end_date,
            }
            for item in schedule.items.all()
        ],
    }


def confirmed_bookings(
    item_ids: Iterable | None = None,
    *,
    exclude_schedule_id: int | None = None,
) -> list[dict]:
    schedules = Schedule.objects.filter(status__in=BLOCKING_STATUSES)
    if item_ids is not None:
        schedules = schedules.filter(items__dress_id__in=list(item_ids)).distinct()
    if exclude_schedule_id is not None:
        schedules = schedules.exclude(pk=exclude_schedule_id)
    return [schedule_as_booking(s) for s in schedules.prefetch_related("items")]


def confirmed_booking_windows(
    item_ids: Iterable | None = None,
    *,
    exclude_schedule_id: int | None = None,
) -> list[BookingWindow]:
    """Windows rebuilt from the database on every call."""

    return build_booking_windows(
        confirmed_bookings(item_ids, exclude_schedule_id=exclude_schedule_id)
    )
