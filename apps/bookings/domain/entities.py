"""
Booking Domain Entities

Pure-Python records the storage core computes over:
- ResourceType: sellable capacity dimensions (pallet slots, floor area)
- BillingUnit: how a schedule's base price is quoted
- VolumeDiscountTier / PricingSchedule: per-warehouse, per-resource pricing

None of these know about the database; the ORM layer converts its rows
into them (see apps.warehouses.models.PricingSchedule.to_domain).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping, Tuple

from shared.domain.exceptions import InvalidDiscountError, UnsupportedResourceError
from shared.domain.value_objects import SUPPORTED_CURRENCIES, to_decimal

HUNDRED = Decimal(100)


class ResourceType(str, Enum):
    """Capacity dimensions a warehouse can sell."""
    PALLET = 'pallet'   # pallet slots, whole units
    AREA = 'area'       # floor area in square feet

    @classmethod
    def parse(cls, value) -> 'ResourceType':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedResourceError(f"Unknown resource type: {value!r}") from None

    @property
    def unit_label(self) -> str:
        return 'pallets' if self is ResourceType.PALLET else 'sq ft'


class BillingUnit(str, Enum):
    PER_UNIT_PER_DAY = 'per_unit_per_day'
    PER_UNIT_PER_WEEK = 'per_unit_per_week'
    PER_UNIT_PER_MONTH = 'per_unit_per_month'
    PER_UNIT_PER_YEAR = 'per_unit_per_year'

    @property
    def period_name(self) -> str:
        return self.value.rsplit('_', 1)[-1]


def validate_percent(value, label: str = 'Discount') -> Decimal:
    percent = to_decimal(value)
    if percent < 0 or percent > HUNDRED:
        raise InvalidDiscountError(f"{label} percent must be between 0 and 100, got {percent}")
    return percent


@dataclass(frozen=True)
class VolumeDiscountTier:
    """Quantity >= threshold qualifies for discount_percent."""
    threshold: Decimal
    discount_percent: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'threshold', to_decimal(self.threshold))
        object.__setattr__(
            self, 'discount_percent', validate_percent(self.discount_percent, 'Volume discount')
        )
        if self.threshold < 0:
            raise ValueError("Volume discount threshold cannot be negative")

    def qualifies(self, quantity: Decimal) -> bool:
        return quantity >= self.threshold


@dataclass(frozen=True)
class PricingSchedule:
    """
    Pricing for one resource type at one warehouse.

    min_quantity / max_quantity are inclusive; None means unbounded. Tiers
    are stored sorted by descending threshold, the order in which they are
    resolved.
    """
    resource_type: ResourceType
    base_price: Decimal
    billing_unit: BillingUnit
    min_quantity: Decimal | None = None
    max_quantity: Decimal | None = None
    volume_discounts: Tuple[VolumeDiscountTier, ...] = field(default_factory=tuple)
    currency: str = 'USD'

    def __post_init__(self):
        object.__setattr__(self, 'resource_type', ResourceType.parse(self.resource_type))
        object.__setattr__(self, 'billing_unit', BillingUnit(self.billing_unit))
        if self.base_price is None:
            raise ValueError("Pricing schedule is missing a base price")
        base_price = to_decimal(self.base_price)
        if base_price < 0:
            raise ValueError("Base price cannot be negative")
        object.__setattr__(self, 'base_price', base_price)

        minimum = None if self.min_quantity is None else to_decimal(self.min_quantity)
        maximum = None if self.max_quantity is None else to_decimal(self.max_quantity)
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"min_quantity ({minimum}) exceeds max_quantity ({maximum})")
        object.__setattr__(self, 'min_quantity', minimum)
        object.__setattr__(self, 'max_quantity', maximum)

        tiers = tuple(sorted(self.volume_discounts, key=lambda t: t.threshold, reverse=True))
        thresholds = [tier.threshold for tier in tiers]
        if len(set(thresholds)) != len(thresholds):
            raise ValueError("Volume discount thresholds must be unique")
        object.__setattr__(self, 'volume_discounts', tiers)

        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def from_mapping(
        cls,
        *,
        resource_type,
        base_price,
        billing_unit,
        volume_discounts: Mapping | None = None,
        min_quantity=None,
        max_quantity=None,
        currency: str = 'USD',
    ) -> 'PricingSchedule':
        """Build a schedule from the stored ``{"threshold": percent}`` JSON form."""
        tiers = tuple(
            VolumeDiscountTier(threshold=to_decimal(threshold), discount_percent=to_decimal(percent))
            for threshold, percent in (volume_discounts or {}).items()
        )
        return cls(
            resource_type=resource_type,
            base_price=base_price,
            billing_unit=billing_unit,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
            volume_discounts=tiers,
            currency=currency,
        )
