"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=Booking.Status.choices)
    warehouse = django_filters.NumberFilter(field_name="warehouse_id", lookup_expr="exact")
    resource_type = django_filters.ChoiceFilter(choices=Booking.ResourceTypeChoices.choices)
    # Bookings overlapping [active_from, active_to)
    active_from = django_filters.DateFilter(field_name="end_date", lookup_expr="gt")
    active_to = django_filters.DateFilter(field_name="start_date", lookup_expr="lt")

    class Meta:
        model = Booking
        fields = ["status", "warehouse", "resource_type"]
