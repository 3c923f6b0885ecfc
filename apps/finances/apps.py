import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


def schedule_revenue_recalculation(event):
    """Completed schedules feed the revenue of their try-on (or submission) month."""
    from apps.bookings.domain.events import ScheduleDeleted
    from apps.finances.tasks import recalculate_monthly_revenue

    if event.revenue_date is None:
        return
    if isinstance(event, ScheduleDeleted):
        if event.status != 'completed':
            return
    elif not event.touches_status('completed'):
        return

    logger.info("Revenue recalculation queued for %s", event.revenue_date)
    recalculate_monthly_revenue.delay(event.revenue_date.isoformat())


class FinancesConfig(AppConfig):
    name = 'apps.finances'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from shared.application.message_bus import message_bus
        from apps.bookings.domain.events import ScheduleDeleted, ScheduleStatusChanged

        message_bus.register_event_handler(ScheduleStatusChanged, schedule_revenue_recalculation)
        message_bus.register_event_handler(ScheduleDeleted, schedule_revenue_recalculation)
