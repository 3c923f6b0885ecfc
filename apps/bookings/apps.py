import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


def log_booking_requested(event):
    logger.info("New booking request: %s", event.to_dict())


class BookingsConfig(AppConfig):
    name = 'apps.bookings'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from shared.application.message_bus import message_bus
        from apps.bookings.domain.events import BookingRequested

        message_bus.register_event_handler(BookingRequested, log_booking_requested)
