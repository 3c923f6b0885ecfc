"""
Booking Request Aggregate

A booking request is what a checkout submits: the customer's contact
details, the cart lines and, for rentals, the try-on appointment.

Key invariants:
- at least one line
- every rental range is strictly ordered and free of confirmed bookings
- with rental lines, the try-on date is required and falls strictly
  before the earliest rental start
- the total is computed here from the lines; a total sent by the client
  is never trusted
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple

from apps.bookings.domain.availability import BookingWindow, first_unavailable_date
from apps.bookings.domain.events import BookingRequested, ScheduleStatusChanged
from apps.cart.domain.cart import CartLineItem, VariantKind, compute_total, is_quote_only
from apps.cart.domain.exceptions import InvalidRangeError, SelectionError, UnavailableDateError
from shared.domain.base import Aggregate
from shared.domain.value_objects import normalize_date


class ScheduleStatus(str, Enum):
    PENDING = 'pending'
    APPOINTMENT_CONFIRMED = 'apConfirmed'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class EmptyBookingRequestError(SelectionError):
    def __init__(self):
        super().__init__("Le panier est vide.")


class TryOnDateError(SelectionError):
    field = 'try_on_date'


@dataclass(frozen=True)
class CustomerDetails:
    full_name: str
    phone: str
    address: str = ''
    note: str = ''

    def __post_init__(self):
        if not (self.full_name or '').strip():
            raise ValueError("Customer full name is required")
        if not (self.phone or '').strip():
            raise ValueError("Customer phone is required")


@dataclass
class BookingRequest(Aggregate):
    customer: Optional[CustomerDetails] = None
    lines: Tuple[CartLineItem, ...] = field(default_factory=tuple)
    try_on_date: Optional[date] = None
    status: ScheduleStatus = ScheduleStatus.PENDING
    schedule_id: Optional[int] = None
    submitted_on: Optional[date] = None

    def __post_init__(self):
        self.lines = tuple(self.lines)
        self.status = ScheduleStatus(self.status)
        if self.try_on_date is not None:
            self.try_on_date = normalize_date(self.try_on_date)

    @property
    def total(self) -> Decimal:
        return compute_total(self.lines)

    @property
    def quote_only(self) -> bool:
        return is_quote_only(self.lines)

    @property
    def revenue_date(self) -> Optional[date]:
        """Day the request counts towards: the try-on, else the submission day"""
        return self.try_on_date or self.submitted_on

    @property
    def rental_lines(self) -> Tuple[CartLineItem, ...]:
        return tuple(line for line in self.lines if line.variant_kind is VariantKind.RENTAL)

    @property
    def earliest_rental_start(self) -> Optional[date]:
        starts = [line.start_date for line in self.rental_lines if line.start_date]
        return min(starts) if starts else None

    def validate(self, windows: Iterable[BookingWindow]) -> None:
        """
        Check the request against the invariants above

        Raises the first SelectionError found.
        """
        if not self.lines:
            raise EmptyBookingRequestError()

        self.validate_ranges(windows)

        earliest = self.earliest_rental_start
        if earliest is not None:
            if self.try_on_date is None:
                raise TryOnDateError("La date d'essayage est requise pour une location.")
            if self.try_on_date >= earliest:
                raise TryOnDateError("La date d'essayage doit être avant la période de location.")

    def validate_ranges(self, windows: Iterable[BookingWindow]) -> None:
        """Every rental range must be ordered and clear of the given windows"""
        windows = list(windows)
        for line in self.rental_lines:
            if line.start_date >= line.end_date:
                raise InvalidRangeError()
            conflict = first_unavailable_date(line.item_id, line.start_date, line.end_date, windows)
            if conflict is not None:
                raise UnavailableDateError(conflict, item_id=line.item_id)

    def mark_submitted(self, schedule_id: int):
        """Record the persisted identifier and emit BookingRequested"""
        self.schedule_id = schedule_id
        self.add_event(BookingRequested(
            schedule_id=schedule_id,
            total=self.total,
            quote_only=self.quote_only,
            has_rentals=bool(self.rental_lines),
        ))

    def change_status(self, new_status) -> bool:
        """
        Move to another status; returns False when nothing changed

        The back-office may correct a status in any direction, so every
        transition between known statuses is accepted.
        """
        new_status = ScheduleStatus(new_status)
        if new_status is self.status:
            return False
        old_status = self.status
        self.status = new_status
        self.add_event(ScheduleStatusChanged(
            schedule_id=self.schedule_id,
            old_status=old_status.value,
            new_status=new_status.value,
            try_on_date=self.try_on_date,
            revenue_date=self.revenue_date,
        ))
        return True
