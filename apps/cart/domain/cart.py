"""
Cart Domain

The cart is an ordered list of line items of three kinds:
- rental: quantity is the number of rental days, priced per day
- purchase: quantity is a unit count, priced per unit
- quote: a quote request for a new-collection dress, never priced

Lines sharing the identity key (item_id, kind, color, size) are merged by
adding quantities; the price captured when the line was first added is
kept. Persistence goes through an explicit storage collaborator: load()
reads it, every mutation writes it back via save().
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple
import logging

from shared.domain.value_objects import Money, normalize_date

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.cart.storage import CartStorage

logger = logging.getLogger(__name__)


class VariantKind(str, Enum):
    RENTAL = 'rental'
    PURCHASE = 'purchase'
    QUOTE = 'quote'


IdentityKey = Tuple[str, VariantKind, str, str]


@dataclass(frozen=True)
class CartLineItem:
    """
    One line of the cart

    unit_price is a snapshot (day rate for rentals, unit price for
    purchases) taken when the line was added. It is never refreshed from
    the catalog afterwards.
    """
    item_id: str
    variant_kind: VariantKind
    color: str
    size: str = ''
    quantity: int = 1
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    unit_price: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, 'item_id', str(self.item_id))
        object.__setattr__(self, 'variant_kind', VariantKind(self.variant_kind))
        object.__setattr__(self, 'size', self.size or '')
        if not self.color:
            raise ValueError("Line item color is required")
        if int(self.quantity) < 1:
            raise ValueError("Line item quantity must be at least 1")
        object.__setattr__(self, 'quantity', int(self.quantity))
        if self.unit_price is not None:
            object.__setattr__(self, 'unit_price', Decimal(str(self.unit_price)))

        if self.variant_kind is VariantKind.RENTAL:
            if self.start_date is None or self.end_date is None:
                raise ValueError("Rental line items need a start and an end date")
            object.__setattr__(self, 'start_date', normalize_date(self.start_date))
            object.__setattr__(self, 'end_date', normalize_date(self.end_date))
        else:
            object.__setattr__(self, 'start_date', None)
            object.__setattr__(self, 'end_date', None)

    @property
    def key(self) -> IdentityKey:
        return (self.item_id, self.variant_kind, self.color, self.size)

    @property
    def is_quote(self) -> bool:
        return self.variant_kind is VariantKind.QUOTE

    def line_total(self) -> Decimal:
        if self.is_quote or self.unit_price is None:
            return Decimal('0')
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> 'CartLineItem':
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        return {
            'item_id': self.item_id,
            'kind': self.variant_kind.value,
            'color': self.color,
            'size': self.size,
            'quantity': self.quantity,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'unit_price': str(self.unit_price) if self.unit_price is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CartLineItem':
        return cls(
            item_id=data['item_id'],
            variant_kind=data['kind'],
            color=data['color'],
            size=data.get('size') or '',
            quantity=data.get('quantity', 1),
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
            unit_price=data.get('unit_price'),
        )


def compute_total(items: Iterable[CartLineItem]) -> Decimal:
    """
    Sum of rental and purchase lines; quote lines count as zero

    No rounding happens here, only when the amount is presented.
    """
    return sum((item.line_total() for item in items), Decimal('0'))


def is_quote_only(items: Iterable[CartLineItem]) -> bool:
    """A non-empty cart made only of quote requests has no meaningful total"""
    items = list(items)
    return bool(items) and all(item.is_quote for item in items)


class Cart:
    """
    Cart owned by one shopper session

    Mutations are all-or-nothing: the new list is written to storage
    first and only then replaces the in-memory one.
    """

    def __init__(self, storage: 'CartStorage', items: Iterable[CartLineItem] = ()):
        self._storage = storage
        self._items: List[CartLineItem] = list(items)

    @classmethod
    def load(cls, storage: 'CartStorage') -> 'Cart':
        items = []
        for raw in storage.read():
            try:
                items.append(CartLineItem.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping unreadable cart line from storage: %r", raw)
        return cls(storage, items)

    def save(self) -> None:
        self._persist(self._items)

    def _persist(self, items: List[CartLineItem]) -> None:
        self._storage.write([item.to_dict() for item in items])
        self._items = items

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self, line: CartLineItem) -> CartLineItem:
        """Add a line, merging it into an existing one with the same key"""
        items = list(self._items)
        for index, existing in enumerate(items):
            if existing.key == line.key:
                merged = existing.with_quantity(existing.quantity + line.quantity)
                items[index] = merged
                self._persist(items)
                logger.info(
                    "Cart line %s merged, quantity %d -> %d",
                    line.key, existing.quantity, merged.quantity,
                )
                return merged

        items.append(line)
        self._persist(items)
        logger.info("Cart line %s added with quantity %d", line.key, line.quantity)
        return line

    def remove_item(self, item_id, variant_kind, color: str, size: str = '') -> int:
        """Remove lines matching the key exactly; returns how many were removed"""
        key = (str(item_id), VariantKind(variant_kind), color, size or '')
        kept = [item for item in self._items if item.key != key]
        removed = len(self._items) - len(kept)
        if removed:
            self._persist(kept)
            logger.info("Cart line %s removed", key)
        return removed

    def clear(self) -> None:
        self._persist([])
        logger.info("Cart cleared")

    @property
    def total(self) -> Decimal:
        return compute_total(self._items)

    @property
    def is_quote_only(self) -> bool:
        return is_quote_only(self._items)

    def snapshot(self, currency: str = 'TND', decimals: int = 2) -> dict:
        """Serializable view of the cart, total rounded for presentation"""
        return {
            'items': [item.to_dict() for item in self._items],
            'total': str(Money(self.total, currency).quantize(decimals)),
            'currency': currency,
            'quote_only': self.is_quote_only,
        }
