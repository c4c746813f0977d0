"""Serializers for warehouses and their pricing schedules."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import PricingSchedule, Warehouse


class PricingScheduleSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingSchedule
        fields = [
            "id",
            "resource_type",
            "base_price",
            "billing_unit",
            "min_quantity",
            "max_quantity",
            "volume_discounts",
            "currency",
        ]
        read_only_fields = fields


class WarehouseSerializer(serializers.ModelSerializer):
    pricing_schedules = serializers.SerializerMethodField()

    class Meta:
        model = Warehouse
        fields = [
            "id",
            "name",
            "city",
            "address",
            "total_pallet_slots",
            "total_area_sqft",
            "status",
            "pricing_schedules",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_pricing_schedules(self, obj: Warehouse):  # type: ignore
        schedules = [schedule for schedule in obj.pricing_schedules.all() if schedule.is_active]
        return PricingScheduleSerializer(schedules, many=True).data
