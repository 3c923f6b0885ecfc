"""
Message Bus

Routes domain events to the handlers registered for them. Apps register
their handlers from AppConfig.ready().
"""

from typing import Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Message bus for domain events

    Several handlers may listen to the same event type. A failing handler
    is logged and does not prevent the others from running.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug("Registered event handler %s for %s", handler.__name__, event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: List[DomainEvent]):
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.warning("No handlers registered for event %s", event_type.__name__)
                continue

            logger.info("Publishing event %s (ID: %s)", event_type.__name__, event.event_id)

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Error in event handler %s for event %s",
                        handler.__name__,
                        event_type.__name__,
                    )


# Global message bus instance
message_bus = MessageBus()
