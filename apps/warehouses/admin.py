"""Admin registration for warehouses."""

from __future__ import annotations

from django.contrib import admin

from .models import PricingSchedule, Warehouse


class PricingScheduleInline(admin.TabularInline):
    model = PricingSchedule
    extra = 0
    fields = (
        "resource_type",
        "base_price",
        "billing_unit",
        "min_quantity",
        "max_quantity",
        "volume_discounts",
        "currency",
        "is_active",
    )


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "total_pallet_slots", "total_area_sqft", "status", "created_at")
    list_filter = ("status", "city")
    search_fields = ("name", "city", "address")
    readonly_fields = ("created_at", "updated_at")
    inlines = [PricingScheduleInline]
