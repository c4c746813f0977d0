"""Serializers for the storage booking domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.bookings.domain.entities import ResourceType
from apps.warehouses.models import Warehouse

from .models import Booking

MAX_QUERY_DAYS = 366


class DateRangeQuerySerializer(serializers.Serializer):
    """Validates ``resource_type``, ``start_date`` and ``end_date`` inputs."""

    resource_type = serializers.ChoiceField(choices=[item.value for item in ResourceType])
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] >= attrs["end_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs


class AvailabilityQuerySerializer(DateRangeQuerySerializer):
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=Decimal("0.01"))


class CalendarQuerySerializer(DateRangeQuerySerializer):
    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)
        if (attrs["end_date"] - attrs["start_date"]).days > MAX_QUERY_DAYS:
            raise serializers.ValidationError(
                {"end_date": f"Calendar range is limited to {MAX_QUERY_DAYS} days."}
            )
        return attrs


class BookingRequestSerializer(DateRangeQuerySerializer):
    """Quote and admission input."""

    warehouse = serializers.PrimaryKeyRelatedField(
        queryset=Warehouse.objects.filter(status=Warehouse.Status.ACTIVE)
    )
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)
        if attrs["resource_type"] == ResourceType.PALLET.value and attrs["quantity"] != attrs["quantity"].to_integral_value():
            raise serializers.ValidationError({"quantity": "Pallet quantities must be whole numbers."})
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking with its pricing snapshot."""

    customer_id = serializers.ReadOnlyField(source="customer.id")
    warehouse_id = serializers.ReadOnlyField(source="warehouse.id")
    warehouse_name = serializers.ReadOnlyField(source="warehouse.name")

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "customer_id",
            "warehouse_id",
            "warehouse_name",
            "resource_type",
            "quantity",
            "start_date",
            "end_date",
            "status",
            "notes",
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
            "cancelled_at",
            "cancellation_source",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
