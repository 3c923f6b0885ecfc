"""Admin registration for schedules."""

from __future__ import annotations

from django.contrib import admin

from .models import Schedule, ScheduleItem


class ScheduleItemInline(admin.TabularInline):
    model = ScheduleItem
    extra = 0
    fields = (
        "type",
        "dress",
        "dress_name",
        "color",
        "size",
        "quantity",
        "start_date",
        "end_date",
        "price_per_day",
        "buy_price",
    )


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "full_name",
        "phone",
        "status",
        "try_on_date",
        "total",
        "created_at",
    )
    list_filter = ("status", "try_on_date")
    search_fields = ("full_name", "phone", "items__dress_name")
    readonly_fields = ("total", "created_at", "updated_at")
    inlines = [ScheduleItemInline]
