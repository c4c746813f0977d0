"""ORM-backed implementation of the storage data-access port."""

from __future__ import annotations

from decimal import Decimal
from functools import wraps

import structlog
from django.core.exceptions import ObjectDoesNotExist  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.bookings.domain.entities import PricingSchedule as DomainPricingSchedule, ResourceType
from apps.bookings.domain.inventory import Allocation
from apps.bookings.domain.repository import StorageRepository
from shared.domain.exceptions import DataAccessError, UnsupportedResourceError, WarehouseNotFoundError
from shared.domain.value_objects import DateRange

logger = structlog.get_logger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def wraps_database_errors(method):
    """Re-raise driver and ORM failures as DataAccessError."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as exc:
            logger.error("repository.database_error", operation=method.__name__, error=str(exc))
            raise DataAccessError(f"Storage lookup failed in {method.__name__}") from exc

    return wrapper


class DjangoStorageRepository(StorageRepository):
    """Reads warehouses, schedules, bookings and memberships through the ORM."""

    def _get_warehouse(self, warehouse_id):
        from apps.warehouses.models import Warehouse

        try:
            return Warehouse.objects.get(pk=warehouse_id, status=Warehouse.Status.ACTIVE)
        except (Warehouse.DoesNotExist, ValueError, TypeError):
            raise WarehouseNotFoundError(f"Warehouse {warehouse_id} not found") from None

    def _schedule_queryset(self, warehouse_id, resource_type: ResourceType):
        from apps.warehouses.models import PricingSchedule

        return PricingSchedule.objects.filter(
            warehouse_id=warehouse_id,
            resource_type=resource_type.value,
            is_active=True,
        )

    @wraps_database_errors
    def get_warehouse_capacity(self, warehouse_id, resource_type) -> Decimal:
        resource_type = ResourceType.parse(resource_type)
        warehouse = self._get_warehouse(warehouse_id)
        capacity = warehouse.capacity_for(resource_type)
        if capacity is None or not self._schedule_queryset(warehouse.pk, resource_type).exists():
            raise UnsupportedResourceError(
                f"Warehouse {warehouse_id} does not offer {resource_type.value} storage"
            )
        return capacity

    @wraps_database_errors
    def get_overlapping_bookings(self, warehouse_id, resource_type, dates: DateRange):
        from apps.bookings.models import Booking

        resource_type = ResourceType.parse(resource_type)
        self._get_warehouse(warehouse_id)
        rows = Booking.objects.filter(
            warehouse_id=warehouse_id,
            resource_type=resource_type.value,
            status__in=Booking.OCCUPYING_STATUSES,
            start_date__lt=dates.end_date,
            end_date__gt=dates.start_date,
        ).values_list("id", "quantity", "start_date", "end_date")
        return [
            Allocation(quantity=quantity, dates=DateRange(start, end), booking_id=pk)
            for pk, quantity, start, end in rows
        ]

    @wraps_database_errors
    def get_pricing_schedule(self, warehouse_id, resource_type) -> DomainPricingSchedule:
        resource_type = ResourceType.parse(resource_type)
        self._get_warehouse(warehouse_id)
        schedule = self._schedule_queryset(warehouse_id, resource_type).first()
        if schedule is None:
            raise UnsupportedResourceError(
                f"Warehouse {warehouse_id} has no pricing for {resource_type.value} storage"
            )
        return schedule.to_domain()

    @wraps_database_errors
    def get_membership_discount_percent(self, customer_id) -> Decimal:
        from apps.memberships.models import CustomerMembership

        if customer_id is None:
            return Decimal("0")
        try:
            membership = CustomerMembership.objects.select_related("tier").get(user_id=customer_id)
        except ObjectDoesNotExist:
            return Decimal("0")
        return membership.discount_percent

    @wraps_database_errors
    def lock_resource(self, warehouse_id, resource_type):
        """
        Lock the (warehouse, resource) pricing row for the current transaction.

        Must be called inside transaction.atomic(). Backends without row
        locks fall back to the transaction's own serialization.
        """
        resource_type = ResourceType.parse(resource_type)
        self._get_warehouse(warehouse_id)
        schedule = _lock_queryset_if_possible(self._schedule_queryset(warehouse_id, resource_type)).first()
        if schedule is None:
            raise UnsupportedResourceError(
                f"Warehouse {warehouse_id} has no pricing for {resource_type.value} storage"
            )
        return schedule
