"""Cart services: session carts, selections and checkout."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from apps.bookings.application.command_handlers import (
    SubmitBookingRequestCommand,
    SubmitBookingRequestHandler,
)
from apps.bookings.domain.entities import CustomerDetails
from apps.bookings.models import Schedule
from apps.bookings.services import confirmed_booking_windows
from apps.catalog.services import load_catalog_items

from .domain.cart import Cart, CartLineItem, VariantKind
from .domain.exceptions import SelectionError
from .domain.selection import build_line
from .storage import SessionCartStorage

logger = logging.getLogger(__name__)


class EmptyCartError(SelectionError):
    def __init__(self) -> None:
        super().__init__("Le panier est vide.")


def get_session_cart(request) -> Cart:
    """Cart of the visitor behind ``request``, read from the session."""

    return Cart.load(SessionCartStorage(request.session))


def lines_from_selections(selections: Iterable[Mapping]) -> list[CartLineItem]:
    """
    Turn raw selections into priced lines from the live catalog.

    Each selection carries ``item_id``, ``kind``, ``color``, ``size`` and,
    for rentals, ``start_date``/``end_date``. Booking windows are read
    once for all rented dresses.
    """

    selections = list(selections)
    items = load_catalog_items(s["item_id"] for s in selections)
    rented = [
        int(s["item_id"]) for s in selections if VariantKind(s["kind"]) is VariantKind.RENTAL
    ]
    windows = confirmed_booking_windows(rented) if rented else []
    try:
        return [
            build_line(
                s["kind"],
                items[str(s["item_id"])],
                color=s.get("color"),
                size=s.get("size"),
                start=s.get("start_date"),
                end=s.get("end_date"),
                windows=windows,
            )
            for s in selections
        ]
    except SelectionError as exc:
        logger.warning("Selection rejected: %s", exc)
        raise


def checkout(cart: Cart, customer: CustomerDetails, try_on_date=None) -> Schedule:
    """Submit the cart as a booking request, then empty it."""

    if not len(cart):
        raise EmptyCartError()

    schedule = SubmitBookingRequestHandler().handle(
        SubmitBookingRequestCommand(
            customer=customer,
            lines=cart.items,
            try_on_date=try_on_date,
        )
    )
    cart.clear()
    logger.info("Cart checked out as schedule %s", schedule.pk)
    return schedule
