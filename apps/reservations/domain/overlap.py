"""
Overlap validation

Pure predicates over half-open intervals. Every place that needs to
know whether dates collide (the store, the date picker, the API)
delegates here.
"""

from datetime import date, timedelta
from typing import Iterable, List
from uuid import UUID

from shared.domain.value_objects import DateRange

from apps.reservations.domain.entities import Interval

ONE_DAY = timedelta(days=1)


def _range_of(item) -> DateRange:
    return item.dates if isinstance(item, Interval) else item


def overlaps(a, b) -> bool:
    """
    True if two intervals (or DateRanges) share at least one night.

    Back-to-back intervals, where one checks out the day the other
    checks in, do not overlap.
    """
    return _range_of(a).overlaps_with(_range_of(b))


def find_conflicts(
    candidate,
    existing: Iterable[Interval],
    exclude_id: UUID | None = None,
) -> List[Interval]:
    """
    Return every existing interval that overlaps ``candidate``

    ``exclude_id`` skips the interval being edited. An empty list
    means the candidate is legal.
    """
    dates = _range_of(candidate)
    return [
        interval for interval in existing
        if interval.id != exclude_id and interval.dates.overlaps_with(dates)
    ]


def range_contains_blocked_date(
    start_exclusive: date,
    end_exclusive: date,
    existing: Iterable[Interval],
) -> bool:
    """
    True if picking ``end_exclusive`` as check-out would jump over a booking

    A day strictly between the two picks is blocked when some interval
    checks in on it or occupies it as an interior day. Interval ends
    landing inside the range are caught by the interval's own start or
    interior days, since the chosen check-in is never inside an interval.
    """
    first = start_exclusive + ONE_DAY
    last = end_exclusive - ONE_DAY
    if first > last:
        return False

    for interval in existing:
        # Check-in day inside the range
        if first <= interval.check_in <= last:
            return True
        # Interior days: check_in + 1 .. check_out - 1
        interior_first = interval.check_in + ONE_DAY
        interior_last = interval.check_out - ONE_DAY
        if interior_first <= interior_last and interior_first <= last and first <= interior_last:
            return True
    return False
