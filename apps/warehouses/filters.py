"""FilterSet definitions for warehouse listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Warehouse


class WarehouseFilterSet(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    resource_type = django_filters.CharFilter(method="filter_resource_type")
    min_pallet_slots = django_filters.NumberFilter(field_name="total_pallet_slots", lookup_expr="gte")
    min_area_sqft = django_filters.NumberFilter(field_name="total_area_sqft", lookup_expr="gte")

    class Meta:
        model = Warehouse
        fields = ["city"]

    def filter_resource_type(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            pricing_schedules__resource_type=value,
            pricing_schedules__is_active=True,
        ).distinct()
