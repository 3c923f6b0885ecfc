"""
Selection -> Cart Line

Validates what the shopper picked on a dress page and turns it into a
cart line with a price snapshot.

Checks, in order:
1. required fields (color always, size when the dress has sizes,
   both dates for a rental)
2. the rental range itself (end strictly after start)
3. availability of every day of the range
"""

from typing import Iterable, Optional
import logging

from apps.bookings.domain.availability import BookingWindow, first_unavailable_date
from apps.cart.domain.cart import CartLineItem, VariantKind
from apps.cart.domain.exceptions import (
    IncompleteSelectionError,
    InvalidRangeError,
    NotForSaleError,
    UnavailableDateError,
)
from apps.catalog.domain.items import CatalogItem
from shared.domain.value_objects import DateLike, normalize_date

logger = logging.getLogger(__name__)

MISSING_COLOR = "Veuillez choisir une couleur."
MISSING_SIZE = "Veuillez choisir une taille."
MISSING_START = "Veuillez choisir une date de début."
MISSING_END = "Veuillez choisir une date de fin."


UNKNOWN_COLOR = "Cette couleur n'existe pas pour cette robe."
UNKNOWN_SIZE = "Cette taille n'existe pas pour cette robe."


def _check_variant(item: CatalogItem, color: Optional[str], size: Optional[str], missing: dict) -> None:
    if not color:
        missing['color'] = MISSING_COLOR
    elif item.colors and color not in item.colors:
        missing['color'] = UNKNOWN_COLOR
    if item.requires_size and not size:
        missing['size'] = MISSING_SIZE
    elif size and item.sizes and size not in item.sizes:
        missing['size'] = UNKNOWN_SIZE


def build_rental_line(
    item: CatalogItem,
    color: Optional[str],
    size: Optional[str],
    start: Optional[DateLike],
    end: Optional[DateLike],
    windows: Iterable[BookingWindow],
) -> CartLineItem:
    """
    Rental line priced at the effective day rate

    Quantity is the number of rental days, (end - start) in whole days.
    Availability is checked on the inclusive range [start, end].
    """
    if item.is_quote_only or item.effective_day_rate is None:
        raise NotForSaleError("Cette robe n'est pas disponible à la location.")

    missing: dict = {}
    _check_variant(item, color, size, missing)
    if not start:
        missing['start_date'] = MISSING_START
    if not end:
        missing['end_date'] = MISSING_END
    if missing:
        raise IncompleteSelectionError(missing)

    start_day, end_day = normalize_date(start), normalize_date(end)
    if start_day >= end_day:
        raise InvalidRangeError()

    conflict = first_unavailable_date(item.id, start_day, end_day, windows)
    if conflict is not None:
        logger.warning("Rental of item %s rejected, %s is booked", item.id, conflict)
        raise UnavailableDateError(conflict, item_id=item.id)

    return CartLineItem(
        item_id=item.id,
        variant_kind=VariantKind.RENTAL,
        color=color,
        size=size or '',
        quantity=(end_day - start_day).days,
        start_date=start_day,
        end_date=end_day,
        unit_price=item.effective_day_rate,
    )


def build_purchase_line(item: CatalogItem, color: Optional[str], size: Optional[str]) -> CartLineItem:
    """Single-unit purchase line priced at the effective sale price"""
    missing: dict = {}
    _check_variant(item, color, size, missing)
    if missing:
        raise IncompleteSelectionError(missing)

    price = item.effective_buy_price
    if not price:
        raise NotForSaleError("Cette robe n'est pas disponible à l'achat.")

    return CartLineItem(
        item_id=item.id,
        variant_kind=VariantKind.PURCHASE,
        color=color,
        size=size or '',
        quantity=1,
        unit_price=price,
    )


def build_quote_line(item: CatalogItem, color: Optional[str], size: Optional[str] = '') -> CartLineItem:
    """Quote request; only the color is mandatory and no price is attached"""
    if not color:
        raise IncompleteSelectionError({'color': MISSING_COLOR})

    return CartLineItem(
        item_id=item.id,
        variant_kind=VariantKind.QUOTE,
        color=color,
        size=size or '',
        quantity=1,
    )


def build_line(
    kind,
    item: CatalogItem,
    color: Optional[str] = None,
    size: Optional[str] = None,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    windows: Iterable[BookingWindow] = (),
) -> CartLineItem:
    """Dispatch on the requested kind"""
    kind = VariantKind(kind)
    if kind is VariantKind.RENTAL:
        return build_rental_line(item, color, size, start, end, windows)
    if kind is VariantKind.PURCHASE:
        return build_purchase_line(item, color, size)
    return build_quote_line(item, color, size)
