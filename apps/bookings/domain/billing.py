"""
Billing period normalization.

One rule per billing unit, used by quoting, admission and invoicing alike.
Duration is always the half-open day count ``end_date - start_date``.

- per day:   periods = days
- per week:  periods = ceil(days / 7), at least 1
- per month: periods = ceil(days / 30), at least 1 (partial months bill whole)
- per year:  periods = days / 365 as an exact fraction, never rounded
             through months
"""

from decimal import Decimal

from shared.domain.value_objects import DateRange

from .entities import BillingUnit

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


def _ceil_periods(days: int, period_days: int) -> Decimal:
    return Decimal(max(1, -(-days // period_days)))


def day_count(days: int) -> Decimal:
    return Decimal(days)


def week_count(days: int) -> Decimal:
    return _ceil_periods(days, DAYS_PER_WEEK)


def month_count(days: int) -> Decimal:
    return _ceil_periods(days, DAYS_PER_MONTH)


def year_fraction(days: int) -> Decimal:
    return Decimal(days) / Decimal(DAYS_PER_YEAR)


PERIOD_RULES = {
    BillingUnit.PER_UNIT_PER_DAY: day_count,
    BillingUnit.PER_UNIT_PER_WEEK: week_count,
    BillingUnit.PER_UNIT_PER_MONTH: month_count,
    BillingUnit.PER_UNIT_PER_YEAR: year_fraction,
}


def billing_periods(dates: DateRange, unit: BillingUnit) -> Decimal:
    return PERIOD_RULES[BillingUnit(unit)](dates.days)


def describe_periods(count: Decimal, unit: BillingUnit) -> str:
    """Human label for a period count, e.g. '2 months' or '0.5 years'."""
    name = BillingUnit(unit).period_name
    if count == count.to_integral_value():
        shown = format(count.to_integral_value(), 'f')
    else:
        shown = format(count.quantize(Decimal('0.0001')).normalize(), 'f')
    return f"{shown} {name}" if count == 1 else f"{shown} {name}s"
