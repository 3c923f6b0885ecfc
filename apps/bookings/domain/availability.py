"""
Availability Engine

Answers "can this dress be rented on this day / for these days?" from
the booking windows derived from confirmed schedules.

Rules:
- A day is unavailable if it falls inside ANY interval of the dress's
  window, both interval ends included.
- A dress without a window is available every day (fail-open). Windows
  are rebuilt from the bookings on each call site, never cached, so a
  booking that shows up later is always taken into account.
- Timestamps are reduced to UTC calendar dates with normalize_date(),
  for the candidate day and for the interval bounds alike.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional, Tuple

from shared.domain.value_objects import DateLike, DateRange, normalize_date


@dataclass(frozen=True)
class BookingWindow:
    """
    Days already committed for one catalog item

    Intervals are kept as given: they may overlap or touch each other.
    """
    item_id: str
    intervals: Tuple[DateRange, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'item_id', str(self.item_id))
        object.__setattr__(self, 'intervals', tuple(self.intervals))

    def blocks(self, day: date) -> bool:
        return any(interval.contains(day) for interval in self.intervals)

    def to_dict(self) -> dict:
        return {
            'item_id': self.item_id,
            'unavailable_dates': [
                {'start_date': i.start_date.isoformat(), 'end_date': i.end_date.isoformat()}
                for i in self.intervals
            ],
        }


def _window_for(item_id, windows: Iterable[BookingWindow]) -> Optional[BookingWindow]:
    key = str(item_id)
    for window in windows:
        if window.item_id == key:
            return window
    return None


def is_date_available(item_id, day: DateLike, windows: Iterable[BookingWindow]) -> bool:
    """True unless the day falls inside an interval of the item's window."""
    window = _window_for(item_id, windows)
    if window is None:
        return True
    return not window.blocks(normalize_date(day))


def first_unavailable_date(
    item_id,
    start: DateLike,
    end: DateLike,
    windows: Iterable[BookingWindow],
) -> Optional[date]:
    """
    First day of [start, end] that is not available, or None

    Walks the range day by day with the same check as is_date_available.
    An inverted range has no days and therefore no conflict; rejecting
    it is the caller's job.
    """
    windows = list(windows)
    current = normalize_date(start)
    last = normalize_date(end)
    while current <= last:
        if not is_date_available(item_id, current, windows):
            return current
        current += timedelta(days=1)
    return None


def is_range_available(item_id, start: DateLike, end: DateLike, windows: Iterable[BookingWindow]) -> bool:
    """AND of is_date_available over every day of [start, end] inclusive."""
    return first_unavailable_date(item_id, start, end, windows) is None


def disabled_dates(
    item_id,
    start: DateLike,
    end: DateLike,
    windows: Iterable[BookingWindow],
    today: Optional[DateLike] = None,
) -> List[date]:
    """
    Days of [start, end] the calendar must not offer

    Past days (before `today`) are disabled as well as booked ones.
    """
    windows = list(windows)
    floor = normalize_date(today) if today is not None else None
    result = []
    for day in DateRange.between(start, end).days():
        if floor is not None and day < floor:
            result.append(day)
        elif not is_date_available(item_id, day, windows):
            result.append(day)
    return result


def build_booking_windows(bookings: Iterable[Mapping]) -> List[BookingWindow]:
    """
    Derive booking windows from confirmed bookings

    Each booking is a mapping with an `items` list; rental items carrying
    an item reference and both dates contribute one interval to the
    window of that item. Anything else (purchases, quotes, missing or
    unparsable dates) is skipped. Item order follows first appearance.
    """
    grouped: dict = {}
    for booking in bookings:
        for item in booking.get('items') or ():
            if item.get('type') != 'rental':
                continue
            item_id = item.get('item_id')
            start, end = item.get('start_date'), item.get('end_date')
            if item_id is None or not start or not end:
                continue
            try:
                interval = DateRange.between(start, end)
            except (TypeError, ValueError):
                continue
            grouped.setdefault(str(item_id), []).append(interval)

    return [BookingWindow(item_id=key, intervals=tuple(intervals)) for key, intervals in grouped.items()]
