"""Admin registration for revenues."""

from __future__ import annotations

from django.contrib import admin

from .models import Revenue


@admin.register(Revenue)
class RevenueAdmin(admin.ModelAdmin):
    list_display = (
        "month",
        "total_sales",
        "sales_revenue",
        "total_rental",
        "rental_revenue",
        "updated_at",
    )
    date_hierarchy = "month"
    readonly_fields = ("created_at", "updated_at")
