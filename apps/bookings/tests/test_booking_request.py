"""Tests for the booking request aggregate."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.availability import BookingWindow
from apps.bookings.domain.entities import (
    BookingRequest,
    CustomerDetails,
    EmptyBookingRequestError,
    ScheduleStatus,
    TryOnDateError,
)
from apps.bookings.domain.events import BookingRequested, ScheduleStatusChanged
from apps.cart.domain.cart import CartLineItem, VariantKind
from apps.cart.domain.exceptions import UnavailableDateError
from shared.domain.value_objects import DateRange


def rental(start=date(2025, 6, 20), end=date(2025, 6, 22)):
    return CartLineItem(
        item_id="5",
        variant_kind=VariantKind.RENTAL,
        color="Ivoire",
        quantity=(end - start).days,
        start_date=start,
        end_date=end,
        unit_price=Decimal("100"),
    )


def quote():
    return CartLineItem(item_id="8", variant_kind=VariantKind.QUOTE, color="Rose")


@pytest.fixture
def customer():
    return CustomerDetails(full_name="Amira B.", phone="+216 20 000 000")


def test_customer_requires_name_and_phone():
    with pytest.raises(ValueError):
        CustomerDetails(full_name=" ", phone="1")
    with pytest.raises(ValueError):
        CustomerDetails(full_name="Amira", phone="")


def test_empty_request_is_rejected(customer):
    with pytest.raises(EmptyBookingRequestError):
        BookingRequest(customer=customer).validate([])


def test_try_on_date_required_with_rentals(customer):
    request = BookingRequest(customer=customer, lines=[rental()])
    with pytest.raises(TryOnDateError) as exc_info:
        request.validate([])
    assert exc_info.value.as_errors().keys() == {"try_on_date"}


@pytest.mark.parametrize("try_on", [date(2025, 6, 20), date(2025, 6, 25)])
def test_try_on_must_precede_earliest_rental(customer, try_on):
    request = BookingRequest(
        customer=customer,
        lines=[rental(), rental(start=date(2025, 6, 28), end=date(2025, 6, 30))],
        try_on_date=try_on,
    )
    with pytest.raises(TryOnDateError):
        request.validate([])


def test_quote_only_request_needs_no_try_on(customer):
    request = BookingRequest(customer=customer, lines=[quote()])
    request.validate([])
    assert request.quote_only
    assert request.total == Decimal("0")


def test_conflicting_rental_is_rejected(customer):
    windows = [BookingWindow("5", (DateRange(date(2025, 6, 22), date(2025, 6, 25)),))]
    request = BookingRequest(customer=customer, lines=[rental()], try_on_date="2025-06-18")
    with pytest.raises(UnavailableDateError) as exc_info:
        request.validate(windows)
    assert exc_info.value.date == date(2025, 6, 22)


def test_valid_request_total_and_submission_event(customer):
    request = BookingRequest(customer=customer, lines=[rental(), quote()], try_on_date="2025-06-18")
    request.validate([])
    request.mark_submitted(42)

    assert request.total == Decimal("200")
    (event,) = request.events
    assert isinstance(event, BookingRequested)
    assert event.schedule_id == 42
    assert event.has_rentals and not event.quote_only
    assert event.to_dict()["total"] == "200"


def test_change_status_emits_event_only_on_change():
    request = BookingRequest(schedule_id=3, status="pending", try_on_date=date(2025, 6, 1))
    assert request.change_status(ScheduleStatus.PENDING) is False
    assert request.events == []

    assert request.change_status("completed") is True
    (event,) = request.events
    assert isinstance(event, ScheduleStatusChanged)
    assert (event.old_status, event.new_status) == ("pending", "completed")
    assert event.touches_status("completed")
    assert not event.touches_status("confirmed")
    assert event.revenue_date == date(2025, 6, 1)


def test_status_event_falls_back_to_submission_day():
    request = BookingRequest(schedule_id=4, status="confirmed", submitted_on=date(2025, 6, 10))

    request.change_status("completed")

    (event,) = request.events
    assert event.try_on_date is None
    assert event.revenue_date == date(2025, 6, 10)


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        BookingRequest().change_status("archived")
