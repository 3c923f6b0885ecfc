"""FilterSet definitions for the dress catalog."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Dress


class DressFilterSet(django_filters.FilterSet):
    category = django_filters.NumberFilter(field_name="categories__id", lookup_expr="exact")
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    for_sale = django_filters.BooleanFilter(field_name="is_for_sale")
    new_collection = django_filters.BooleanFilter(field_name="new_collection")
    on_discount = django_filters.BooleanFilter(method="filter_on_discount")

    class Meta:
        model = Dress
        fields = ["category", "search", "for_sale", "new_collection"]

    def filter_on_discount(self, queryset, name, value):  # type: ignore
        if value is None:
            return queryset
        discounted = queryset.filter(is_rent_on_discount=True) | queryset.filter(is_sell_on_discount=True)
        if value:
            return discounted.distinct()
        return queryset.exclude(pk__in=discounted.values("pk"))
