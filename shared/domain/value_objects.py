"""
Common Value Objects

Value objects used across multiple domains:
- Money: Monetary amount with currency, exact Decimal arithmetic
- DateRange: Half-open range of whole days [start_date, end_date)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidRangeError

CENT = Decimal('0.01')
SUPPORTED_CURRENCIES = ('USD', 'EUR', 'GBP', 'CAD')


def to_decimal(value) -> Decimal:
    """
    Coerce a numeric input to Decimal without binary float artefacts.

    Floats go through their shortest repr, so 0.1 becomes Decimal('0.1')
    rather than Decimal('0.1000000000000000055511151231257827').
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not numeric quantities")
    if isinstance(value, (int, str)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Arithmetic keeps full Decimal precision; nothing is rounded until
    rounded() is called, which quantizes to cents with ROUND_HALF_UP.
    """
    amount: Decimal
    currency: str = 'USD'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', to_decimal(self.amount))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency is required")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    def _check_currency(self, other: 'Money', operation: str):
        if not isinstance(other, Money):
            raise TypeError(f"Can only {operation} Money and Money")
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot {operation} different currencies: {self.currency} and {other.currency}"
            )

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'add')
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'subtract')
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor) -> 'Money':
        if isinstance(factor, Money) or isinstance(factor, bool):
            raise TypeError("Can only multiply Money by number")
        return Money(self.amount * to_decimal(factor), self.currency)

    __rmul__ = __mul__

    def percent(self, percentage) -> 'Money':
        """Return ``percentage`` percent of this amount (unrounded)."""
        return Money(self.amount * to_decimal(percentage) / Decimal(100), self.currency)

    def rounded(self) -> 'Money':
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount <= other.amount

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    A booking ending on day D and one starting on day D share the boundary
    without overlapping.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise InvalidRangeError(
                f"Start date ({self.start_date}) must be before end date ({self.end_date})"
            )

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # Overlap formula: start1 < end2 AND end1 > start2
        return (self.start_date < other.end_date and
                self.end_date > other.start_date)

    def contains(self, check_date: date) -> bool:
        """Start is inclusive, end is exclusive."""
        return self.start_date <= check_date < self.end_date

    def intersection(self, other: 'DateRange') -> 'DateRange | None':
        if not self.overlaps_with(other):
            return None
        return DateRange(
            max(self.start_date, other.start_date),
            min(self.end_date, other.end_date),
        )

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    def iter_days(self) -> Iterator[date]:
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return self.days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
