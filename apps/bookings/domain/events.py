"""
Booking Domain Events

Published by the unit of work after the admitting or cancelling
transaction has committed.
"""

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange, Money


@dataclass
class BookingAdmitted(DomainEvent):
    """
    Event: A booking passed the capacity check and now occupies capacity

    Triggers:
    - Audit log entry
    - Customer/warehouse notifications (delivered outside this service)
    """
    booking_code: str = ''
    warehouse_id: int | None = None
    resource_type: str = ''
    quantity: Decimal = Decimal('0')
    dates: DateRange | None = None
    total: Money | None = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_code': self.booking_code,
            'warehouse_id': self.warehouse_id,
            'resource_type': self.resource_type,
            'quantity': str(self.quantity),
            'start_date': self.dates.start_date.isoformat() if self.dates else None,
            'end_date': self.dates.end_date.isoformat() if self.dates else None,
            'total': str(self.total.amount) if self.total else None,
            'currency': self.total.currency if self.total else None,
        })
        return data


@dataclass
class BookingCancelled(DomainEvent):
    """Event: A booking released its capacity"""
    booking_code: str = ''
    warehouse_id: int | None = None
    reason: str = ''

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_code': self.booking_code,
            'warehouse_id': self.warehouse_id,
            'reason': self.reason,
        })
        return data
