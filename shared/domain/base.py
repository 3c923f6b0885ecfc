"""
Base Domain Classes

Building blocks shared by the catalog, cart and booking domains:
- ValueObject: immutable objects compared by value (dates, money)
- Aggregate: consistency boundary that records domain events
- DomainEvent: something that happened, published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass
class Aggregate(ABC):
    """
    Base class for aggregate roots

    Aggregates own their invariants and collect domain events which the
    unit of work publishes once the surrounding transaction commits.
    """
    id: UUID = field(default_factory=uuid4)
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        """Record a domain event to be published"""
        self._events.append(event)

    def clear_events(self):
        """Drop collected events (called after they were handed to the bus)"""
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Copy of collected events"""
        return self._events.copy()


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Subclasses add their own payload fields; every field needs a default
    because the base fields already have one.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert event to dictionary for logging/serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
        }
