"""
Booking Domain Events

Published after the transaction that produced them commits.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from shared.domain.base import DomainEvent


@dataclass
class BookingRequested(DomainEvent):
    """
    Event: a shopper submitted a booking request (cart checkout)

    Triggers:
    - log the new request for the back-office
    """
    schedule_id: Optional[int] = None
    total: Decimal = Decimal('0')
    quote_only: bool = False
    has_rentals: bool = False

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            schedule_id=self.schedule_id,
            total=str(self.total),
            quote_only=self.quote_only,
            has_rentals=self.has_rentals,
        )
        return data


@dataclass
class ScheduleStatusChanged(DomainEvent):
    """
    Event: the back-office moved a schedule to another status

    Triggers:
    - recalculate monthly revenue when the schedule enters or leaves
      "completed"
    """
    schedule_id: Optional[int] = None
    old_status: str = ''
    new_status: str = ''
    try_on_date: Optional[date] = None
    revenue_date: Optional[date] = None

    def touches_status(self, status: str) -> bool:
        return status in (self.old_status, self.new_status) and self.old_status != self.new_status

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            schedule_id=self.schedule_id,
            old_status=self.old_status,
            new_status=self.new_status,
            try_on_date=self.try_on_date.isoformat() if self.try_on_date else None,
            revenue_date=self.revenue_date.isoformat() if self.revenue_date else None,
        )
        return data


@dataclass
class ScheduleDeleted(DomainEvent):
    """
    Event: the back-office deleted a schedule

    Triggers:
    - recalculate monthly revenue when a completed schedule disappears
    """
    schedule_id: Optional[int] = None
    status: str = ''
    try_on_date: Optional[date] = None
    revenue_date: Optional[date] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            schedule_id=self.schedule_id,
            status=self.status,
            try_on_date=self.try_on_date.isoformat() if self.try_on_date else None,
            revenue_date=self.revenue_date.isoformat() if self.revenue_date else None,
        )
        return data
