from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.billing import billing_periods, describe_periods
from apps.bookings.domain.entities import BillingUnit
from shared.domain.value_objects import DateRange


def _days(n):
    start = date(2024, 1, 1)
    return DateRange(start, date.fromordinal(start.toordinal() + n))


@pytest.mark.parametrize(
    "days, unit, expected",
    [
        (1, BillingUnit.PER_UNIT_PER_DAY, Decimal(1)),
        (45, BillingUnit.PER_UNIT_PER_DAY, Decimal(45)),
        (1, BillingUnit.PER_UNIT_PER_WEEK, Decimal(1)),
        (7, BillingUnit.PER_UNIT_PER_WEEK, Decimal(1)),
        (8, BillingUnit.PER_UNIT_PER_WEEK, Decimal(2)),
        (5, BillingUnit.PER_UNIT_PER_MONTH, Decimal(1)),
        (30, BillingUnit.PER_UNIT_PER_MONTH, Decimal(1)),
        (31, BillingUnit.PER_UNIT_PER_MONTH, Decimal(2)),
        (365, BillingUnit.PER_UNIT_PER_YEAR, Decimal(1)),
    ],
)
def test_billing_periods(days, unit, expected):
    assert billing_periods(_days(days), unit) == expected


def test_yearly_billing_is_an_exact_fraction_of_days():
    periods = billing_periods(_days(73), BillingUnit.PER_UNIT_PER_YEAR)
    assert periods == Decimal(73) / Decimal(365)
    assert periods == Decimal("0.2")


def test_describe_periods():
    assert describe_periods(Decimal(1), BillingUnit.PER_UNIT_PER_MONTH) == "1 month"
    assert describe_periods(Decimal(3), BillingUnit.PER_UNIT_PER_WEEK) == "3 weeks"
    assert describe_periods(Decimal("0.5"), BillingUnit.PER_UNIT_PER_YEAR) == "0.5 years"
