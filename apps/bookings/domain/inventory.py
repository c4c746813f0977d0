"""
Capacity Timeline

Occupancy accounting for one warehouse and one resource type. The
timeline is built from the allocations of occupancy-counting bookings and
answers two questions about a query window:

- overlap_sum(): total quantity of every allocation that touches the
  window at all. Over-counts allocations that only partially overlap but
  never under-counts, so it never reports more room than exists.
- peak_load(): the true maximum concurrent quantity on any single day of
  the window, found with a sweep over the window's days.

The timeline is read-only. Enforcing capacity belongs to the admission
workflow (apps.bookings.application.command_handlers).
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from shared.domain.value_objects import DateRange, to_decimal

ZERO = Decimal('0')


@dataclass(frozen=True)
class Allocation:
    """
    Quantity of a resource held by one booking over a date range.
    """
    quantity: Decimal
    dates: DateRange
    booking_id: int | None = None

    def __post_init__(self):
        object.__setattr__(self, 'quantity', to_decimal(self.quantity))
        if self.quantity <= 0:
            raise ValueError("Allocation quantity must be positive")


class CapacityTimeline:
    """
    Usage:
        timeline = CapacityTimeline(repository.get_overlapping_bookings(...))
        occupied = timeline.overlap_sum(dates)
    """

    def __init__(self, allocations: Iterable[Allocation]):
        self.allocations: List[Allocation] = list(allocations)

    def overlapping(self, dates: DateRange) -> List[Allocation]:
        return [a for a in self.allocations if a.dates.overlaps_with(dates)]

    def overlap_sum(self, dates: DateRange) -> Decimal:
        return sum((a.quantity for a in self.overlapping(dates)), ZERO)

    def daily_load(self, dates: DateRange) -> List[Tuple[date, Decimal]]:
        """
        Concurrent quantity on every day of ``dates``.

        Each allocation is clipped to the window and contributes +quantity
        on its first day and -quantity on its exclusive end day; a running
        total over the window's days gives the per-day load.
        """
        deltas: Dict[date, Decimal] = defaultdict(lambda: ZERO)
        for allocation in self.overlapping(dates):
            clipped = allocation.dates.intersection(dates)
            deltas[clipped.start_date] += allocation.quantity
            deltas[clipped.end_date] -= allocation.quantity

        load = ZERO
        result = []
        for day in dates.iter_days():
            load += deltas.get(day, ZERO)
            result.append((day, load))
        return result

    def peak_load(self, dates: DateRange) -> Decimal:
        return max((load for _, load in self.daily_load(dates)), default=ZERO)

    def __len__(self) -> int:
        return len(self.allocations)

    def __repr__(self):
        return f"CapacityTimeline(allocations={len(self.allocations)})"
