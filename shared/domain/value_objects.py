"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a half-open range of calendar dates (check-in to check-out)
- Month: A calendar month, the unit every calendar view is rendered in
- parse_date / parse_amount: boundary coercion for raw dates and money
"""

from calendar import monthrange
import re
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterator

from shared.domain.base import ValueObject

CENTS = Decimal('0.01')
ISO_DATE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

# The last month keeps a following day, so a month's half-open range fits in `date`
MIN_YEAR = date.min.year
MAX_YEAR = date.max.year - 1


def parse_date(value) -> date:
    """
    Coerce a raw date (date object or ISO 'YYYY-MM-DD' string)

    Datetimes are rejected: calendar dates carry no time-of-day.

    Raises:
        ValueError: If the value cannot be read as a calendar date
    """
    if isinstance(value, date) and not hasattr(value, 'hour'):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not ISO_DATE.fullmatch(text):
            raise ValueError(f"Not a YYYY-MM-DD date: {value!r}")
        return date.fromisoformat(text)
    raise ValueError(f"Not a calendar date: {value!r}")


def parse_amount(value) -> Decimal:
    """
    Coerce a raw monetary value to a Decimal with two places

    None and empty strings mean zero, like an untouched form field.

    Raises:
        ValueError: If the value is not numeric
    """
    if value is None or value == '':
        return Decimal('0.00')
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not an amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value!r}")
    return amount.quantize(CENTS)


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods, availability checks, etc.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        # Validation
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share any dates.
        Note: end_date is exclusive, so adjacent ranges don't overlap.

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
        """
        Check if a date is within this range

        Note: start_date is inclusive, end_date is exclusive
        """
        return self.start_date <= check_date < self.end_date

    def strictly_contains(self, check_date: date) -> bool:
        """Check if a date lies strictly between start and end (both excluded)"""
        return self.start_date < check_date < self.end_date

    def days(self) -> Iterator[date]:
        """Iterate the occupied days: start_date up to, not including, end_date"""
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def clip(self, other: 'DateRange') -> 'DateRange | None':
        """Return the part of this range inside ``other``, or None if disjoint"""
        if not self.overlaps_with(other):
            return None
        return DateRange(max(self.start_date, other.start_date),
                         min(self.end_date, other.end_date))

    def __len__(self) -> int:
        """
        Return the number of days (nights) in this range

        This is the number of nights for a booking.
        """
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


@dataclass(frozen=True)
class Month(ValueObject):
    """
    Calendar month value object

    Month navigation never touches anything but the month itself.
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise ValueError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {self.year}")

    @classmethod
    def of(cls, day: date) -> 'Month':
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, value: str) -> 'Month':
        """Parse a 'YYYY-MM' string"""
        try:
            year, month = value.strip().split('-', 1)
            return cls(int(year), int(month))
        except (AttributeError, ValueError) as exc:
            raise ValueError(f"Month must look like YYYY-MM, got {value!r}") from exc

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, len(self))

    @property
    def dates(self) -> DateRange:
        """The whole month as a half-open range"""
        return DateRange(self.first_day, self.last_day + timedelta(days=1))

    def previous(self) -> 'Month':
        if self.month == 1:
            return Month(self.year - 1, 12)
        return Month(self.year, self.month - 1)

    def next(self) -> 'Month':
        if self.month == 12:
            return Month(self.year + 1, 1)
        return Month(self.year, self.month + 1)

    def __len__(self) -> int:
        return monthrange(self.year, self.month)[1]

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"
