"""Wiring between Django settings and the storage booking core."""

from __future__ import annotations

from django.conf import settings  # type: ignore

from apps.bookings.domain.availability import AvailabilityCalculator, OccupancyPolicy
from apps.bookings.domain.pricing import PricingEngine

from .repositories import DjangoStorageRepository


def build_repository() -> DjangoStorageRepository:
    return DjangoStorageRepository()


def get_occupancy_policy() -> OccupancyPolicy:
    """Deployment-wide policy; quotes, admission and calendars all share it."""

    return OccupancyPolicy(getattr(settings, "WAREHOUSE_OCCUPANCY_POLICY", OccupancyPolicy.OVERLAP_SUM.value))


def get_availability_calculator(repository=None) -> AvailabilityCalculator:
    return AvailabilityCalculator(repository or build_repository(), policy=get_occupancy_policy())


def get_pricing_engine(repository=None) -> PricingEngine:
    return PricingEngine(repository or build_repository())
