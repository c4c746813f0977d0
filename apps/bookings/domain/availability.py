"""
Availability Calculator

Remaining capacity for a warehouse, resource type and date range.

The result is a snapshot, not a reservation. Two requests can pass the
same check before either booking is persisted; closing that gap is the
admission workflow's job (row lock + recheck inside one transaction).

Occupancy policies:
- overlap_sum (default): occupied = sum of every overlapping booking.
  Peak-conservative: may over-count partially overlapping bookings but
  never reports more availability than truly exists.
- daily_peak: occupied = highest single-day concurrent load in the range.

The policy is chosen once per deployment (WAREHOUSE_OCCUPANCY_POLICY) so
quotes, admission and calendars all agree.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List

import structlog

from shared.domain.value_objects import DateRange, to_decimal

from .entities import HUNDRED, ResourceType
from .inventory import ZERO, CapacityTimeline
from .repository import StorageRepository

logger = structlog.get_logger(__name__)


class OccupancyPolicy(str, Enum):
    OVERLAP_SUM = 'overlap_sum'
    DAILY_PEAK = 'daily_peak'


@dataclass(frozen=True)
class AvailabilityResult:
    warehouse_id: object
    resource_type: ResourceType
    dates: DateRange
    total_capacity: Decimal
    occupied_capacity: Decimal
    available_capacity: Decimal
    policy: OccupancyPolicy = OccupancyPolicy.OVERLAP_SUM

    @property
    def utilization_percent(self) -> Decimal:
        if self.total_capacity <= 0:
            return ZERO
        return (self.occupied_capacity * HUNDRED / self.total_capacity).quantize(Decimal('0.01'))

    def fits(self, quantity) -> bool:
        return to_decimal(quantity) <= self.available_capacity

    def to_dict(self) -> dict:
        return {
            'warehouse_id': self.warehouse_id,
            'resource_type': self.resource_type.value,
            'start_date': self.dates.start_date.isoformat(),
            'end_date': self.dates.end_date.isoformat(),
            'total_capacity': str(self.total_capacity),
            'occupied_capacity': str(self.occupied_capacity),
            'available_capacity': str(self.available_capacity),
            'utilization_percent': str(self.utilization_percent),
            'policy': self.policy.value,
        }


@dataclass(frozen=True)
class DailyOccupancy:
    day: date
    occupied: Decimal
    available: Decimal

    def to_dict(self) -> dict:
        return {
            'date': self.day.isoformat(),
            'occupied': str(self.occupied),
            'available': str(self.available),
        }


class AvailabilityCalculator:
    """Pure, stateless computation over the repository's current data."""

    def __init__(self, repository: StorageRepository, policy=OccupancyPolicy.OVERLAP_SUM):
        self.repository = repository
        self.policy = OccupancyPolicy(policy)

    def _load(self, warehouse_id, resource_type, start_date, end_date):
        dates = DateRange(start_date, end_date)
        resource_type = ResourceType.parse(resource_type)
        total = self.repository.get_warehouse_capacity(warehouse_id, resource_type)
        timeline = CapacityTimeline(
            self.repository.get_overlapping_bookings(warehouse_id, resource_type, dates)
        )
        return dates, resource_type, total, timeline

    def calculate_availability(
        self, warehouse_id, resource_type, start_date: date, end_date: date
    ) -> AvailabilityResult:
        dates, resource_type, total, timeline = self._load(
            warehouse_id, resource_type, start_date, end_date
        )

        if self.policy is OccupancyPolicy.DAILY_PEAK:
            occupied = timeline.peak_load(dates)
        else:
            occupied = timeline.overlap_sum(dates)

        result = AvailabilityResult(
            warehouse_id=warehouse_id,
            resource_type=resource_type,
            dates=dates,
            total_capacity=total,
            occupied_capacity=occupied,
            available_capacity=max(ZERO, total - occupied),
            policy=self.policy,
        )
        logger.debug(
            "availability.calculated",
            warehouse_id=warehouse_id,
            resource_type=resource_type.value,
            dates=str(dates),
            bookings=len(timeline),
            occupied=str(occupied),
            available=str(result.available_capacity),
        )
        return result

    def daily_occupancy(
        self, warehouse_id, resource_type, start_date: date, end_date: date
    ) -> List[DailyOccupancy]:
        """Per-day calendar of concurrent load, independent of the policy."""
        dates, _, total, timeline = self._load(warehouse_id, resource_type, start_date, end_date)
        return [
            DailyOccupancy(day=day, occupied=load, available=max(ZERO, total - load))
            for day, load in timeline.daily_load(dates)
        ]
