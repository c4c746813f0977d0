"""
Storage core: capacity-aware availability and deterministic pricing.

Everything in this package is plain Python with no Django imports, so it
can be exercised against InMemoryStorageRepository as easily as against
the database.
"""

from .availability import AvailabilityCalculator, AvailabilityResult, DailyOccupancy, OccupancyPolicy
from .entities import BillingUnit, PricingSchedule, ResourceType, VolumeDiscountTier
from .inventory import Allocation, CapacityTimeline
from .pricing import LineItem, PricingBreakdown, PricingEngine, calculate_price, resolve_volume_discount
from .repository import InMemoryStorageRepository, StorageRepository

__all__ = [
    'Allocation',
    'AvailabilityCalculator',
    'AvailabilityResult',
    'BillingUnit',
    'CapacityTimeline',
    'DailyOccupancy',
    'InMemoryStorageRepository',
    'LineItem',
    'OccupancyPolicy',
    'PricingBreakdown',
    'PricingEngine',
    'PricingSchedule',
    'ResourceType',
    'StorageRepository',
    'VolumeDiscountTier',
    'calculate_price',
    'resolve_volume_discount',
]
