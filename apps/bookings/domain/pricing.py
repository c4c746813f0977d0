"""
Pricing Engine

Deterministic price computation for a prospective booking.

Order of operations (business policy, do not reorder):
1. base      = quantity * base_price * billing periods
2. volume    = base * volume% (highest qualifying tier only)
3. after     = base - volume
4. member    = after * membership%  (compounds on the volume-discounted
               amount, never on the raw base)
5. total     = max(0, after - member)

All arithmetic is exact Decimal. The total is the exact compounded amount
rounded to cents once (ROUND_HALF_UP). The base and after-volume subtotals
are likewise rounded from their exact values, and each discount line is
the difference between neighbouring rounded figures, so display and
charge always agree.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Tuple

import structlog

from shared.domain.exceptions import QuantityOutOfRangeError
from shared.domain.value_objects import DateRange, Money, to_decimal

from .billing import billing_periods, describe_periods
from .entities import BillingUnit, PricingSchedule, ResourceType, VolumeDiscountTier, validate_percent
from .repository import StorageRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal('0')


def _plain(value: Decimal) -> str:
    return format(value.normalize(), 'f')


@dataclass(frozen=True)
class LineItem:
    description: str
    amount: Money
    quantity: Decimal | None = None
    unit_price: Money | None = None
    is_discount: bool = False

    def to_dict(self) -> dict:
        return {
            'description': self.description,
            'quantity': None if self.quantity is None else str(self.quantity),
            'unit_price': None if self.unit_price is None else str(self.unit_price.amount),
            'amount': str(self.amount.amount),
            'is_discount': self.is_discount,
        }


@dataclass(frozen=True)
class PricingBreakdown:
    resource_type: ResourceType
    quantity: Decimal
    dates: DateRange
    unit_price: Money
    billing_unit: BillingUnit
    period_count: Decimal
    base_amount: Money
    volume_discount_threshold: Decimal | None
    volume_discount_percent: Decimal
    volume_discount_amount: Money
    amount_after_volume: Money
    membership_discount_percent: Decimal
    membership_discount_amount: Money
    total: Money
    line_items: Tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def currency(self) -> str:
        return self.total.currency

    @property
    def total_discount_amount(self) -> Money:
        return self.volume_discount_amount + self.membership_discount_amount

    def to_dict(self) -> dict:
        return {
            'resource_type': self.resource_type.value,
            'quantity': str(self.quantity),
            'start_date': self.dates.start_date.isoformat(),
            'end_date': self.dates.end_date.isoformat(),
            'currency': self.currency,
            'unit_price': str(self.unit_price.amount),
            'billing_unit': self.billing_unit.value,
            'period_count': str(self.period_count),
            'base_amount': str(self.base_amount.amount),
            'volume_discount_threshold': (
                None if self.volume_discount_threshold is None else str(self.volume_discount_threshold)
            ),
            'volume_discount_percent': str(self.volume_discount_percent),
            'volume_discount_amount': str(self.volume_discount_amount.amount),
            'amount_after_volume': str(self.amount_after_volume.amount),
            'membership_discount_percent': str(self.membership_discount_percent),
            'membership_discount_amount': str(self.membership_discount_amount.amount),
            'total_discount_amount': str(self.total_discount_amount.amount),
            'total': str(self.total.amount),
            'line_items': [item.to_dict() for item in self.line_items],
        }


def resolve_volume_discount(
    tiers: Iterable[VolumeDiscountTier], quantity
) -> Optional[VolumeDiscountTier]:
    """
    Highest qualifying tier wins; tiers never stack.

    Thresholds are inclusive: quantity == threshold qualifies.
    """
    quantity = to_decimal(quantity)
    for tier in sorted(tiers, key=lambda t: t.threshold, reverse=True):
        if tier.qualifies(quantity):
            return tier
    return None


def validate_quantity(schedule: PricingSchedule, quantity: Decimal) -> None:
    if (
        quantity <= 0
        or (schedule.min_quantity is not None and quantity < schedule.min_quantity)
        or (schedule.max_quantity is not None and quantity > schedule.max_quantity)
    ):
        raise QuantityOutOfRangeError(quantity, schedule.min_quantity, schedule.max_quantity)


def calculate_price(
    schedule: PricingSchedule,
    quantity,
    start_date: date,
    end_date: date,
    membership_discount_percent=ZERO,
) -> PricingBreakdown:
    quantity = to_decimal(quantity)
    validate_quantity(schedule, quantity)
    membership_percent = validate_percent(membership_discount_percent, 'Membership discount')
    dates = DateRange(start_date, end_date)

    currency = schedule.currency
    periods = billing_periods(dates, schedule.billing_unit)
    unit_price = Money(schedule.base_price, currency)

    base = unit_price * quantity * periods
    tier = resolve_volume_discount(schedule.volume_discounts, quantity)
    volume_percent = tier.discount_percent if tier else ZERO
    volume = base.percent(volume_percent)
    after_volume_exact = base - volume
    total_exact = after_volume_exact - after_volume_exact.percent(membership_percent)

    # Each figure is rounded from its exact value; discount lines are the
    # remainders so the receipt reconciles with the charged total.
    base_amount = base.rounded()
    after_volume = after_volume_exact.rounded()
    total = total_exact.rounded()
    volume_amount = base_amount - after_volume
    membership_amount = after_volume - total

    label = 'Pallet' if schedule.resource_type is ResourceType.PALLET else 'Area'
    items = [
        LineItem(
            description=f"{label} storage ({describe_periods(periods, schedule.billing_unit)})",
            quantity=quantity,
            unit_price=unit_price,
            amount=base_amount,
        )
    ]
    if volume_percent > 0:
        items.append(LineItem(
            description=(
                f"Volume discount ({_plain(volume_percent)}% at "
                f"{_plain(tier.threshold)}+ {schedule.resource_type.unit_label})"
            ),
            amount=volume_amount,
            is_discount=True,
        ))
    if membership_percent > 0:
        items.append(LineItem(
            description=f"Membership discount ({_plain(membership_percent)}%)",
            amount=membership_amount,
            is_discount=True,
        ))

    return PricingBreakdown(
        resource_type=schedule.resource_type,
        quantity=quantity,
        dates=dates,
        unit_price=unit_price,
        billing_unit=schedule.billing_unit,
        period_count=periods,
        base_amount=base_amount,
        volume_discount_threshold=tier.threshold if tier else None,
        volume_discount_percent=volume_percent,
        volume_discount_amount=volume_amount,
        amount_after_volume=after_volume,
        membership_discount_percent=membership_percent,
        membership_discount_amount=membership_amount,
        total=total,
        line_items=tuple(items),
    )


class PricingEngine:
    """Prices bookings; ``quote`` resolves schedule and membership itself."""

    def __init__(self, repository: StorageRepository):
        self.repository = repository

    def calculate_price(self, schedule, quantity, start_date, end_date, membership_discount_percent=ZERO):
        return calculate_price(schedule, quantity, start_date, end_date, membership_discount_percent)

    def quote(
        self,
        warehouse_id,
        resource_type,
        quantity,
        start_date: date,
        end_date: date,
        customer_id=None,
    ) -> PricingBreakdown:
        resource_type = ResourceType.parse(resource_type)
        schedule = self.repository.get_pricing_schedule(warehouse_id, resource_type)
        membership_percent = self.repository.get_membership_discount_percent(customer_id)
        breakdown = calculate_price(schedule, quantity, start_date, end_date, membership_percent)
        logger.debug(
            "pricing.quoted",
            warehouse_id=warehouse_id,
            resource_type=resource_type.value,
            quantity=str(breakdown.quantity),
            total=str(breakdown.total.amount),
        )
        return breakdown
