"""
Storage data-access port

The availability calculator and the pricing engine read everything they
need through StorageRepository. The production implementation is
apps.bookings.repositories.DjangoStorageRepository; the in-memory one
below backs unit tests and ad-hoc what-if calculations.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Set, Tuple

from shared.domain.exceptions import UnsupportedResourceError, WarehouseNotFoundError
from shared.domain.value_objects import DateRange, to_decimal

from .entities import PricingSchedule, ResourceType, validate_percent
from .inventory import Allocation


class StorageRepository(ABC):
    """Read-only view of warehouses, bookings, schedules and memberships."""

    @abstractmethod
    def get_warehouse_capacity(self, warehouse_id, resource_type: ResourceType) -> Decimal:
        """
        Total capacity of ``resource_type`` at the warehouse.

        Raises WarehouseNotFoundError for an unknown warehouse and
        UnsupportedResourceError when the warehouse has no capacity or no
        active pricing schedule for the resource.
        """

    @abstractmethod
    def get_overlapping_bookings(
        self, warehouse_id, resource_type: ResourceType, dates: DateRange
    ) -> List[Allocation]:
        """Occupancy-counting bookings whose interval overlaps ``dates``."""

    @abstractmethod
    def get_pricing_schedule(self, warehouse_id, resource_type: ResourceType) -> PricingSchedule:
        """Active schedule, or UnsupportedResourceError."""

    @abstractmethod
    def get_membership_discount_percent(self, customer_id) -> Decimal:
        """Membership discount for the customer, 0 when not enrolled."""


Key = Tuple[object, ResourceType]


class InMemoryStorageRepository(StorageRepository):
    """Dictionary-backed repository. Holds only occupancy-counting bookings."""

    def __init__(self):
        self._warehouses: Set[object] = set()
        self._capacities: Dict[Key, Decimal] = {}
        self._schedules: Dict[Key, PricingSchedule] = {}
        self._allocations: Dict[Key, List[Allocation]] = defaultdict(list)
        self._memberships: Dict[object, Decimal] = {}

    def add_warehouse(self, warehouse_id, *, pallet_slots=None, area_sqft=None):
        self._warehouses.add(warehouse_id)
        if pallet_slots is not None:
            self._capacities[(warehouse_id, ResourceType.PALLET)] = to_decimal(pallet_slots)
        if area_sqft is not None:
            self._capacities[(warehouse_id, ResourceType.AREA)] = to_decimal(area_sqft)

    def add_schedule(self, warehouse_id, schedule: PricingSchedule):
        self._schedules[(warehouse_id, schedule.resource_type)] = schedule

    def add_booking(
        self,
        warehouse_id,
        resource_type,
        quantity,
        start_date: date,
        end_date: date,
        booking_id=None,
    ) -> Allocation:
        allocation = Allocation(
            quantity=quantity,
            dates=DateRange(start_date, end_date),
            booking_id=booking_id,
        )
        self._allocations[(warehouse_id, ResourceType.parse(resource_type))].append(allocation)
        return allocation

    def set_membership_discount(self, customer_id, percent):
        self._memberships[customer_id] = validate_percent(percent, 'Membership discount')

    def _require_warehouse(self, warehouse_id):
        if warehouse_id not in self._warehouses:
            raise WarehouseNotFoundError(f"Warehouse {warehouse_id} not found")

    def get_warehouse_capacity(self, warehouse_id, resource_type):
        self._require_warehouse(warehouse_id)
        key = (warehouse_id, ResourceType.parse(resource_type))
        if key not in self._capacities or key not in self._schedules:
            raise UnsupportedResourceError(
                f"Warehouse {warehouse_id} does not offer {key[1].value} storage"
            )
        return self._capacities[key]

    def get_overlapping_bookings(self, warehouse_id, resource_type, dates):
        self._require_warehouse(warehouse_id)
        key = (warehouse_id, ResourceType.parse(resource_type))
        return [a for a in self._allocations.get(key, []) if a.dates.overlaps_with(dates)]

    def get_pricing_schedule(self, warehouse_id, resource_type):
        self._require_warehouse(warehouse_id)
        key = (warehouse_id, ResourceType.parse(resource_type))
        try:
            return self._schedules[key]
        except KeyError:
            raise UnsupportedResourceError(
                f"Warehouse {warehouse_id} has no pricing for {key[1].value} storage"
            ) from None

    def get_membership_discount_percent(self, customer_id):
        if customer_id is None:
            return Decimal('0')
        return self._memberships.get(customer_id, Decimal('0'))
