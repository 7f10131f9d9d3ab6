"""
Day status classification

Resolves a calendar day into exactly one status for a set of intervals.
The rules are checked in a fixed order:

1. strictly inside some interval            -> FULLY_BOOKED
2. one interval checks in, another checks out -> TURNAROUND
3. some interval checks in                   -> CHECK_IN
4. some interval checks out                  -> CHECK_OUT
5. otherwise                                 -> VACANT

Interior days are checked first; the no-overlap invariant guarantees at
most one interval can contain a given day strictly.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Tuple

from apps.reservations.domain.entities import Interval, IntervalKind


class DayStatus(Enum):
    VACANT = 'vacant'
    CHECK_IN = 'checkIn'
    CHECK_OUT = 'checkOut'
    TURNAROUND = 'turnaround'
    FULLY_BOOKED = 'fullyBooked'


@dataclass(frozen=True)
class DayClassification:
    """
    Status of one day plus the interval(s) responsible for it

    ``intervals`` is empty for VACANT, holds (checking-out, checking-in)
    for TURNAROUND and the single responsible interval otherwise.
    """
    day: date
    status: DayStatus
    intervals: Tuple[Interval, ...] = ()

    @property
    def kind(self) -> IntervalKind | None:
        """Kind of the responsible interval (None for vacant and turnaround days)"""
        if self.status in (DayStatus.VACANT, DayStatus.TURNAROUND):
            return None
        return self.intervals[0].kind

    @property
    def checking_out(self) -> Interval | None:
        if self.status in (DayStatus.CHECK_OUT, DayStatus.TURNAROUND):
            return self.intervals[0]
        return None

    @property
    def checking_in(self) -> Interval | None:
        if self.status is DayStatus.CHECK_IN:
            return self.intervals[0]
        if self.status is DayStatus.TURNAROUND:
            return self.intervals[1]
        return None

    @property
    def blocks_check_in(self) -> bool:
        """A new stay cannot start on this day"""
        return self.status in (DayStatus.FULLY_BOOKED, DayStatus.CHECK_IN, DayStatus.TURNAROUND)

    @property
    def blocks_check_out(self) -> bool:
        """A new stay cannot end on this day"""
        return self.status in (DayStatus.FULLY_BOOKED, DayStatus.CHECK_OUT, DayStatus.TURNAROUND)

    def to_dict(self) -> dict:
        data = {
            'date': self.day.isoformat(),
            'status': self.status.value,
            'interval_ids': [str(interval.id) for interval in self.intervals],
        }
        if self.kind is not None:
            data['kind'] = self.kind.value
        return data


def classify_day(day: date, intervals: Iterable[Interval]) -> DayClassification:
    """Classify a single day against a property's intervals"""
    starting = None
    ending = None

    for interval in intervals:
        if interval.dates.strictly_contains(day):
            return DayClassification(day, DayStatus.FULLY_BOOKED, (interval,))
        if starting is None and interval.check_in == day:
            starting = interval
        elif ending is None and interval.check_out == day:
            ending = interval

    if starting is not None and ending is not None:
        return DayClassification(day, DayStatus.TURNAROUND, (ending, starting))
    if starting is not None:
        return DayClassification(day, DayStatus.CHECK_IN, (starting,))
    if ending is not None:
        return DayClassification(day, DayStatus.CHECK_OUT, (ending,))
    return DayClassification(day, DayStatus.VACANT)


def classify_days(days: Iterable[date], intervals: Iterable[Interval]) -> list[DayClassification]:
    """Classify many days; the interval list is materialised once"""
    intervals = list(intervals)
    return [classify_day(day, intervals) for day in days]
