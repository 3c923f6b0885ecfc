"""
Catalog Read Model

CatalogItem is the read-only view of a dress that the cart and the
availability engine work with. It decides which price applies:
- rental: discounted day rate when the discount is on and a rate is set
- purchase: discounted price under the same rule
- new collection: quote only, no price at all
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or value == '':
        return None
    return Decimal(str(value))


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str = ''
    price_per_day: Optional[Decimal] = None
    is_rent_on_discount: bool = False
    new_price_per_day: Optional[Decimal] = None
    is_for_sale: bool = False
    buy_price: Optional[Decimal] = None
    is_sell_on_discount: bool = False
    new_buy_price: Optional[Decimal] = None
    is_new_collection: bool = False
    colors: Tuple[str, ...] = field(default_factory=tuple)
    sizes: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'id', str(self.id))
        for name in ('price_per_day', 'new_price_per_day', 'buy_price', 'new_buy_price'):
            object.__setattr__(self, name, _to_decimal(getattr(self, name)))
        object.__setattr__(self, 'colors', tuple(self.colors))
        object.__setattr__(self, 'sizes', tuple(self.sizes))

    @property
    def is_quote_only(self) -> bool:
        return self.is_new_collection

    @property
    def effective_day_rate(self) -> Optional[Decimal]:
        if self.is_quote_only:
            return None
        if self.is_rent_on_discount and self.new_price_per_day:
            return self.new_price_per_day
        return self.price_per_day

    @property
    def effective_buy_price(self) -> Optional[Decimal]:
        if self.is_quote_only or not self.is_for_sale:
            return None
        if self.is_sell_on_discount and self.new_buy_price:
            return self.new_buy_price
        return self.buy_price

    @property
    def requires_size(self) -> bool:
        return bool(self.sizes)

    @classmethod
    def from_model(cls, dress) -> 'CatalogItem':
        """Build the read model from a catalog Dress instance"""
        return cls(
            id=str(dress.pk),
            name=dress.name,
            price_per_day=dress.price_per_day,
            is_rent_on_discount=dress.is_rent_on_discount,
            new_price_per_day=dress.new_price_per_day,
            is_for_sale=dress.is_for_sale,
            buy_price=dress.buy_price,
            is_sell_on_discount=dress.is_sell_on_discount,
            new_buy_price=dress.new_buy_price,
            is_new_collection=dress.new_collection,
            colors=tuple(dress.color_names),
            sizes=tuple(dress.sizes or ()),
        )
