"""Admin registration for the catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Category, Dress, DressColor, DressImage


class DressColorInline(admin.TabularInline):
    model = DressColor
    extra = 0


class DressImageInline(admin.TabularInline):
    model = DressImage
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(Dress)
class DressAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "new_collection",
        "price_per_day",
        "is_rent_on_discount",
        "is_for_sale",
        "buy_price",
        "created_at",
    )
    list_filter = ("new_collection", "is_for_sale", "is_rent_on_discount", "is_sell_on_discount", "categories")
    search_fields = ("name", "description")
    filter_horizontal = ("categories",)
    inlines = [DressColorInline]


@admin.register(DressColor)
class DressColorAdmin(admin.ModelAdmin):
    list_display = ("dress", "color_name")
    search_fields = ("dress__name", "color_name")
    inlines = [DressImageInline]
