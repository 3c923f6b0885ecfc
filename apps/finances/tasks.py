"""Celery tasks for the finance domain."""

from __future__ import annotations

import logging
from datetime import date

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .services import recalculate_month

logger = logging.getLogger(__name__)


@shared_task(name="finances.recalculate_monthly_revenue")
def recalculate_monthly_revenue(month: str | None = None) -> dict[str, str]:
    """
    Recalcule le revenu d'un mois à partir des rendez-vous terminés.

    Sans argument, le mois courant est recalculé (tâche périodique Celery Beat).

    Returns:
        dict: {"month": "YYYY-MM-DD", "sales_revenue": ..., "rental_revenue": ...}
    """
    day = date.fromisoformat(month) if month else timezone.now().date()
    revenue = recalculate_month(day)
    return {
        "month": revenue.month.isoformat(),
        "sales_revenue": str(revenue.sales_revenue),
        "rental_revenue": str(revenue.rental_revenue),
    }
