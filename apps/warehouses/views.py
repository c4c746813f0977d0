"""Warehouse API views."""

from __future__ import annotations

from django.db.models import Prefetch  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.serializers import AvailabilityQuerySerializer, CalendarQuerySerializer
from apps.bookings.services import get_availability_calculator

from .filters import WarehouseFilterSet
from .models import PricingSchedule, Warehouse
from .serializers import WarehouseSerializer


class WarehouseViewSet(viewsets.ReadOnlyModelViewSet):
    """Public warehouse catalogue with capacity lookups."""

    queryset = Warehouse.objects.filter(status=Warehouse.Status.ACTIVE).prefetch_related(
        Prefetch("pricing_schedules", queryset=PricingSchedule.objects.order_by("resource_type"))
    )
    serializer_class = WarehouseSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = WarehouseFilterSet
    ordering_fields = ["name", "city", "total_pallet_slots", "total_area_sqft"]

    def filter_queryset(self, queryset):  # type: ignore
        # resource_type is a capacity query parameter on these actions
        if self.action in {"availability", "calendar"}:
            return queryset
        return super().filter_queryset(queryset)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        """Remaining capacity for a resource type over [start_date, end_date)."""
        warehouse = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = get_availability_calculator().calculate_availability(
            warehouse.pk,
            params["resource_type"],
            params["start_date"],
            params["end_date"],
        )
        payload = result.to_dict()
        if params.get("quantity") is not None:
            payload["quantity"] = str(params["quantity"])
            payload["fits"] = result.fits(params["quantity"])
        return Response(payload)

    @action(detail=True, methods=["get"])
    def calendar(self, request, pk=None):  # type: ignore
        """Per-day occupancy for a resource type."""
        warehouse = self.get_object()
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        days = get_availability_calculator().daily_occupancy(
            warehouse.pk,
            params["resource_type"],
            params["start_date"],
            params["end_date"],
        )
        return Response(
            {
                "warehouse_id": warehouse.pk,
                "resource_type": params["resource_type"],
                "days": [day.to_dict() for day in days],
            }
        )
