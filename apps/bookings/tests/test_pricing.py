from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import pytest

from apps.bookings.domain import PricingEngine, PricingSchedule, calculate_price, resolve_volume_discount
from shared.domain.exceptions import InvalidDiscountError, QuantityOutOfRangeError, UnsupportedResourceError

JUNE = (date(2024, 6, 1), date(2024, 7, 1))


def test_volume_then_membership_discount(pallet_schedule):
    breakdown = calculate_price(pallet_schedule, 75, *JUNE, membership_discount_percent=5)

    assert breakdown.period_count == Decimal(1)
    assert breakdown.base_amount.amount == Decimal("750.00")
    assert breakdown.volume_discount_percent == Decimal(10)
    assert breakdown.volume_discount_threshold == Decimal(50)
    assert breakdown.volume_discount_amount.amount == Decimal("75.00")
    assert breakdown.amount_after_volume.amount == Decimal("675.00")
    assert breakdown.membership_discount_amount.amount == Decimal("33.75")
    assert breakdown.total.amount == Decimal("641.25")
    assert breakdown.total_discount_amount.amount == Decimal("108.75")


def test_membership_discount_compounds_rather_than_adds(pallet_schedule):
    breakdown = calculate_price(pallet_schedule, 75, *JUNE, membership_discount_percent=5)

    additive_total = Decimal("750") * (1 - Decimal("0.15"))
    assert additive_total == Decimal("637.50")
    assert breakdown.total.amount != additive_total


def test_line_items(pallet_schedule):
    breakdown = calculate_price(pallet_schedule, 75, *JUNE, membership_discount_percent=5)

    assert [item.description for item in breakdown.line_items] == [
        "Pallet storage (1 month)",
        "Volume discount (10% at 50+ pallets)",
        "Membership discount (5%)",
    ]
    assert [item.is_discount for item in breakdown.line_items] == [False, True, True]


def test_threshold_is_inclusive_and_highest_tier_wins(pallet_schedule):
    tiers = pallet_schedule.volume_discounts
    assert resolve_volume_discount(tiers, 49) is None
    assert resolve_volume_discount(tiers, 50).discount_percent == Decimal(10)
    assert resolve_volume_discount(tiers, 100).discount_percent == Decimal(15)
    assert resolve_volume_discount(tiers, 500).discount_percent == Decimal(15)


def test_resolved_discount_is_monotone_in_quantity(pallet_schedule):
    previous = Decimal(0)
    for quantity in range(1, 200):
        tier = resolve_volume_discount(pallet_schedule.volume_discounts, quantity)
        percent = tier.discount_percent if tier else Decimal(0)
        assert percent >= previous
        previous = percent


def test_quantity_below_minimum():
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price="10",
        billing_unit="per_unit_per_month",
        min_quantity=10,
    )
    with pytest.raises(QuantityOutOfRangeError) as excinfo:
        calculate_price(schedule, 5, *JUNE)
    assert "below the minimum" in str(excinfo.value)

    with pytest.raises(QuantityOutOfRangeError):
        calculate_price(schedule, 0, *JUNE)


def test_quantity_above_maximum_and_bounds_are_inclusive():
    schedule = PricingSchedule.from_mapping(
        resource_type="area",
        base_price="0.85",
        billing_unit="per_unit_per_month",
        min_quantity=100,
        max_quantity=5000,
    )
    assert calculate_price(schedule, 100, *JUNE).total.amount == Decimal("85.00")
    assert calculate_price(schedule, 5000, *JUNE).total.amount == Decimal("4250.00")
    with pytest.raises(QuantityOutOfRangeError):
        calculate_price(schedule, 5001, *JUNE)


def test_invalid_membership_percent(pallet_schedule):
    with pytest.raises(InvalidDiscountError):
        calculate_price(pallet_schedule, 10, *JUNE, membership_discount_percent=101)
    with pytest.raises(ValueError):
        calculate_price(pallet_schedule, 10, *JUNE, membership_discount_percent=-1)


def test_identical_inputs_give_identical_breakdowns(pallet_schedule):
    first = calculate_price(pallet_schedule, 120, date(2024, 6, 1), date(2024, 8, 15), 7.5)
    second = calculate_price(pallet_schedule, 120, date(2024, 6, 1), date(2024, 8, 15), 7.5)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_yearly_schedule_bills_exact_day_fraction():
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price="120",
        billing_unit="per_unit_per_year",
    )
    # 73 days is exactly 0.2 years
    breakdown = calculate_price(schedule, 10, date(2024, 1, 1), date(2024, 3, 14))
    assert breakdown.period_count == Decimal("0.2")
    assert breakdown.total.amount == Decimal("240.00")


def test_weekly_schedule_rounds_partial_weeks_up():
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price="3",
        billing_unit="per_unit_per_week",
    )
    breakdown = calculate_price(schedule, 10, date(2024, 6, 1), date(2024, 6, 9))
    assert breakdown.period_count == Decimal(2)
    assert breakdown.total.amount == Decimal("60.00")


def test_rounded_figures_reconcile():
    schedule = PricingSchedule.from_mapping(
        resource_type="area",
        base_price="0.3333",
        billing_unit="per_unit_per_day",
        volume_discounts={"1000": "7.5"},
    )
    breakdown = calculate_price(schedule, "1234.5", date(2024, 6, 1), date(2024, 6, 12), "3.3")
    assert breakdown.base_amount - breakdown.volume_discount_amount == breakdown.amount_after_volume
    assert breakdown.amount_after_volume - breakdown.membership_discount_amount == breakdown.total
    for money in (breakdown.base_amount, breakdown.volume_discount_amount, breakdown.total):
        assert money.amount == money.amount.quantize(Decimal("0.01"))


def test_full_discount_floors_total_at_zero():
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price="10",
        billing_unit="per_unit_per_day",
        volume_discounts={"1": 100},
    )
    breakdown = calculate_price(schedule, 5, date(2024, 6, 1), date(2024, 6, 2), 50)
    assert breakdown.total.amount == Decimal("0.00")
    assert breakdown.membership_discount_amount.amount == Decimal("0.00")


def test_engine_quote_uses_customer_membership(repository):
    repository.set_membership_discount(42, 5)
    engine = PricingEngine(repository)

    member = engine.quote(1, "pallet", 75, *JUNE, customer_id=42)
    guest = engine.quote(1, "pallet", 75, *JUNE)

    assert member.total.amount == Decimal("641.25")
    assert guest.total.amount == Decimal("675.00")


def test_engine_quote_without_schedule(repository):
    with pytest.raises(UnsupportedResourceError):
        PricingEngine(repository).quote(1, "area", 10, *JUNE)


def test_total_is_rounded_once_from_the_exact_amount():
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price="10.005",
        billing_unit="per_unit_per_day",
        volume_discounts={"1": 10},
    )
    breakdown = calculate_price(schedule, 1, date(2024, 6, 1), date(2024, 6, 2))

    # exact 9.0045 rounds to 9.00, not 10.01 - 1.00
    assert breakdown.total.amount == Decimal("9.00")
    assert breakdown.base_amount.amount == Decimal("10.01")
    assert breakdown.volume_discount_amount.amount == Decimal("1.01")
    assert breakdown.base_amount - breakdown.volume_discount_amount == breakdown.total


@pytest.mark.parametrize(
    "base_price, quantity, volume, membership",
    [
        ("10.005", 1, 10, "0"),
        ("0.3333", "1234.5", "7.5", "3.3"),
        ("12.345", 75, 10, "5"),
        ("0.85", 333, 15, "12.5"),
    ],
)
def test_total_matches_compounded_discounts(base_price, quantity, volume, membership):
    schedule = PricingSchedule.from_mapping(
        resource_type="pallet",
        base_price=base_price,
        billing_unit="per_unit_per_day",
        volume_discounts={"1": volume},
    )
    breakdown = calculate_price(schedule, quantity, date(2024, 6, 1), date(2024, 6, 4), membership)

    exact = (
        Decimal(base_price) * Decimal(quantity) * 3
        * (1 - Decimal(volume) / 100)
        * (1 - Decimal(membership) / 100)
    )
    assert breakdown.total.amount == exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    assert breakdown.amount_after_volume - breakdown.membership_discount_amount == breakdown.total
