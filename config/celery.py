import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("bridal_world")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Revenu du mois courant - chaque nuit à 2h
    "recalculate-current-month-revenue": {
        "task": "finances.recalculate_monthly_revenue",
        "schedule": crontab(minute=0, hour=2),
    },
}

app.conf.timezone = "Africa/Tunis"
