from decimal import Decimal

import pytest

from apps.bookings.domain import InMemoryStorageRepository, PricingSchedule


@pytest.fixture
def pallet_schedule():
    return PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price=Decimal("10"),
        billing_unit="per_unit_per_month",
        volume_discounts={"50": 10, "100": 15},
    )


@pytest.fixture
def repository(pallet_schedule):
    repo = InMemoryStorageRepository()
    repo.add_warehouse(1, pallet_slots=100)
    repo.add_schedule(1, pallet_schedule)
    return repo


@pytest.fixture
def customer(db, django_user_model):
    return django_user_model.objects.create_user(
        username="shipper",
        email="shipper@example.com",
        password="ShipperPass123",
    )


@pytest.fixture
def warehouse(db):
    from apps.warehouses.models import PricingSchedule as PricingScheduleModel, Warehouse

    warehouse = Warehouse.objects.create(
        name="Riverside Logistics",
        city="Columbus",
        total_pallet_slots=100,
        total_area_sqft=Decimal("20000"),
    )
    PricingScheduleModel.objects.create(
        warehouse=warehouse,
        resource_type="pallet",
        base_price=Decimal("10"),
        billing_unit="per_unit_per_month",
        volume_discounts={"50": 10, "100": 15},
    )
    return warehouse


@pytest.fixture
def make_booking(customer, warehouse):
    from apps.bookings.models import Booking

    def _make(quantity, start_date, end_date, status=Booking.Status.CONFIRMED, resource_type="pallet"):
        return Booking.objects.create(
            customer=customer,
            warehouse=warehouse,
            resource_type=resource_type,
            quantity=Decimal(quantity),
            start_date=start_date,
            end_date=end_date,
            status=status,
        )

    return _make
