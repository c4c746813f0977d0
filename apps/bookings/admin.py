"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "warehouse",
        "customer",
        "resource_type",
        "quantity",
        "status",
        "start_date",
        "end_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "resource_type", "warehouse", "start_date", "end_date")
    search_fields = ("booking_code", "warehouse__name", "customer__email", "customer__username")
    readonly_fields = (
        "booking_code",
        "created_at",
        "updated_at",
        "currency",
        "unit_price",
        "billing_unit",
        "period_count",
        "base_amount",
        "volume_discount_percent",
        "volume_discount_amount",
        "membership_discount_percent",
        "membership_discount_amount",
        "total_amount",
    )
