"""FilterSets for storefront content."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import AboutImage, Banner


class BannerFilterSet(django_filters.FilterSet):
    active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Banner
        fields = ["active"]


class AboutImageFilterSet(django_filters.FilterSet):
    active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = AboutImage
        fields = ["active"]
