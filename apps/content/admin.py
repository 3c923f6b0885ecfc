"""Admin registration for storefront content."""

from __future__ import annotations

from django.contrib import admin

from .models import AboutImage, Banner, Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "subject", "created_at")
    search_fields = ("name", "email", "subject", "message")
    readonly_fields = ("created_at",)


@admin.register(Banner, AboutImage)
class DisplayImageAdmin(admin.ModelAdmin):
    list_display = ("image_url", "sort_order", "is_active")
    list_editable = ("sort_order", "is_active")
    list_filter = ("is_active",)
