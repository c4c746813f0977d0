from datetime import date
from decimal import Decimal

import pytest

from shared.domain.exceptions import InvalidRangeError
from shared.domain.value_objects import DateRange, Money, to_decimal


def test_to_decimal_uses_shortest_float_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("12.50") == Decimal("12.50")
    with pytest.raises(TypeError):
        to_decimal(True)


def test_money_arithmetic_keeps_full_precision_until_rounded():
    amount = Money(Decimal("10.005")) * 3
    assert amount.amount == Decimal("30.015")
    assert amount.rounded().amount == Decimal("30.02")


def test_money_percent_and_rounding_half_up():
    assert Money(Decimal("675")).percent(5).amount == Decimal("33.75")
    assert Money(Decimal("0.125")).rounded().amount == Decimal("0.13")


def test_money_rejects_mixed_currencies_and_negatives():
    with pytest.raises(ValueError):
        Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")
    with pytest.raises(ValueError):
        Money(Decimal("-1"))


def test_date_range_requires_start_before_end():
    with pytest.raises(InvalidRangeError):
        DateRange(date(2024, 6, 1), date(2024, 6, 1))
    with pytest.raises(ValueError):
        DateRange(date(2024, 6, 2), date(2024, 6, 1))


def test_ranges_sharing_a_boundary_do_not_overlap():
    june = DateRange(date(2024, 6, 1), date(2024, 7, 1))
    july = DateRange(date(2024, 7, 1), date(2024, 8, 1))
    assert not june.overlaps_with(july)
    assert not july.overlaps_with(june)
    assert june.overlaps_with(DateRange(date(2024, 6, 30), date(2024, 7, 2)))


def test_date_range_is_half_open():
    dates = DateRange(date(2024, 6, 1), date(2024, 6, 4))
    assert dates.days == 3
    assert list(dates.iter_days()) == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert dates.contains(date(2024, 6, 1))
    assert not dates.contains(date(2024, 6, 4))


def test_intersection():
    a = DateRange(date(2024, 6, 1), date(2024, 6, 10))
    b = DateRange(date(2024, 6, 5), date(2024, 6, 20))
    assert a.intersection(b) == DateRange(date(2024, 6, 5), date(2024, 6, 10))
    assert a.intersection(DateRange(date(2024, 6, 10), date(2024, 6, 11))) is None
