"""
Unit of Work

Wraps a database transaction and holds the domain events raised inside
it, so they reach the message bus only after the commit succeeded.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            schedule.change_status(new_status)
            uow.collect_events(schedule)
        # events are published after the transaction commits
    """

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._atomic = None
        self._bus = bus

    def __enter__(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """Schedule publication of the collected events for after commit"""
        events = self._events.copy()
        self._events.clear()
        logger.debug("Committing unit of work with %d events", len(events))
        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Discard collected events, the transaction is rolled back"""
        if self._events:
            logger.warning("Rolling back, discarding %d events", len(self._events))
        self._events.clear()

    def record(self, event: DomainEvent):
        """Queue an event raised outside an aggregate"""
        self._events.append(event)

    def collect_events(self, source):
        """
        Take the pending events of an aggregate or event-bearing model

        Anything exposing `events` and `clear_events()` qualifies.
        """
        new_events = getattr(source, 'events', None)
        if new_events:
            self._events.extend(new_events)
            source.clear_events()
            logger.debug("Collected %d events from %s", len(new_events), source.__class__.__name__)

    def _publish_events(self, events: List[DomainEvent]):
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info("Publishing %d domain events after commit", len(events))
        bus.publish_events(events)
