"""
Common Value Objects

Value objects used across the catalog, cart and booking domains:
- normalize_date: the one place where timestamps become calendar dates
- DateRange: a closed range of calendar dates (both ends inclusive)
- Money: a monetary amount with currency
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Union

from shared.domain.base import ValueObject

DateLike = Union[date, datetime, str]

CURRENCY_CODE = re.compile(r'[A-Z]{3}')


def normalize_date(value: DateLike) -> date:
    """
    Truncate a timestamp to its UTC calendar date

    Naive datetimes are taken as UTC, aware ones are converted to UTC
    first. ISO-8601 strings (with or without a time part, "Z" suffix
    allowed) are parsed. Every availability check goes through here so
    the calendar and the checkout never disagree on a boundary day.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date value")
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            value = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid date value: {value!r}") from exc

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot normalize {type(value).__name__} to a date")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Closed date range value object

    Represents every calendar day from start_date to end_date, both
    inclusive. A single-day range (start_date == end_date) is valid:
    a rental that starts and ends on the same day still blocks that day.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must not be after end date ({self.end_date})")

    @classmethod
    def between(cls, start: DateLike, end: DateLike) -> 'DateRange':
        """Build a range from any pair of timestamps, normalized to UTC dates"""
        return cls(normalize_date(start), normalize_date(end))

    def contains(self, check_date: DateLike) -> bool:
        """Check if a date falls inside the range (inclusive on both ends)"""
        return self.start_date <= normalize_date(check_date) <= self.end_date

    def days(self) -> Iterator[date]:
        """Iterate every day of the range in order"""
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        """Number of calendar days covered by the range"""
        return (self.end_date - self.start_date).days + 1

    def __str__(self):
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Amounts are kept at full precision; rounding happens only in
    quantize() when a value is about to be shown.
    """
    amount: Decimal
    currency: str = 'TND'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not isinstance(self.currency, str) or not CURRENCY_CODE.fullmatch(self.currency):
            raise ValueError(f"Currency must be an ISO 4217 code: {self.currency!r}")

    @classmethod
    def zero(cls, currency: str = 'TND') -> 'Money':
        return cls(Decimal('0'), currency)

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def quantize(self, decimals: int = 2) -> Decimal:
        """Amount rounded for presentation"""
        exponent = Decimal(1).scaleb(-decimals)
        return self.amount.quantize(exponent, rounding=ROUND_HALF_UP)

    def __str__(self):
        return f"{self.quantize():,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"
