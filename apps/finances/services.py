"""Revenue services: monthly aggregation, summary and spreadsheet export."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from io import BytesIO
from typing import Iterable

from django.db import transaction  # type: ignore
from django.db.models import Sum  # type: ignore
from django.db.models.functions import Coalesce, TruncDate  # type: ignore
from openpyxl import Workbook  # type: ignore

from apps.bookings.models import Schedule, ScheduleItem
from shared.domain.value_objects import Money

from .models import Revenue

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_bounds(value: date) -> tuple[date, date]:
    """First and last day of the month containing ``value``."""

    first = month_start(value)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)


def compute_month_figures(month: date) -> dict:
    """
    Figures of completed schedules whose try-on date falls in ``month``.

    Schedules without a try-on date (purchases, quotes) count on the
    local day they were submitted.

    Purchases count units sold; rentals count rented lines. Revenue is
    the sum of line totals (price snapshot times quantity).
    """

    first, last = month_bounds(month)
    items = ScheduleItem.objects.annotate(
        revenue_date=Coalesce("schedule__try_on_date", TruncDate("schedule__created_at")),
    ).filter(
        schedule__status=Schedule.Status.COMPLETED,
        revenue_date__range=(first, last),
    )
    figures = {
        "total_sales": 0,
        "sales_revenue": ZERO,
        "total_rental": 0,
        "rental_revenue": ZERO,
    }
    for item in items:
        if item.type == ScheduleItem.Type.PURCHASE:
            figures["total_sales"] += item.quantity
            figures["sales_revenue"] += item.line_total()
        elif item.type == ScheduleItem.Type.RENTAL:
            figures["total_rental"] += 1
            figures["rental_revenue"] += item.line_total()
    return figures


def upsert_revenue(month: date, **figures) -> tuple[Revenue, bool]:
    """Create or update the record of ``month``; returns (record, created)."""

    with transaction.atomic():
        revenue, created = Revenue.objects.update_or_create(
            month=month_start(month),
            defaults={
                "total_sales": figures.get("total_sales") or 0,
                "sales_revenue": figures.get("sales_revenue") or ZERO,
                "total_rental": figures.get("total_rental") or 0,
                "rental_revenue": figures.get("rental_revenue") or ZERO,
            },
        )
    return revenue, created


def recalculate_month(month: date) -> Revenue:
    figures = compute_month_figures(month)
    revenue, created = upsert_revenue(month, **figures)
    logger.info(
        "Revenue %s %s: %d sold (%s), %d rented (%s)",
        revenue.month.strftime("%Y-%m"),
        "created" if created else "updated",
        revenue.total_sales,
        revenue.sales_revenue,
        revenue.total_rental,
        revenue.rental_revenue,
    )
    return revenue


def revenue_summary(queryset=None) -> dict:
    """Totals across the given records (all records by default)."""

    qs = Revenue.objects.all() if queryset is None else queryset
    totals = qs.aggregate(sales=Sum("sales_revenue"), rental=Sum("rental_revenue"))
    # SQLite hands sums back unquantized
    sales = Money(totals["sales"] or ZERO).quantize(2)
    rental = Money(totals["rental"] or ZERO).quantize(2)
    return {
        "total_revenue": str(sales + rental),
        "sales_revenue": str(sales),
        "rental_revenue": str(rental),
    }


def export_revenues_xlsx(revenues: Iterable[Revenue]) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Revenus"
    worksheet.append(["Mois", "Ventes", "CA ventes", "Locations", "CA locations", "CA total"])
    for revenue in revenues:
        worksheet.append(
            [
                revenue.month.strftime("%Y-%m"),
                int(revenue.total_sales or 0),
                float(revenue.sales_revenue or 0),
                int(revenue.total_rental or 0),
                float(revenue.rental_revenue or 0),
                float(revenue.total_revenue),
            ]
        )

    for column in worksheet.columns:
        column_letter = column[0].column_letter
        max_length = max(len(str(cell.value)) for cell in column if cell.value is not None)
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, 30)

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
