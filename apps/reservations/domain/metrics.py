"""Occupancy figures for a property's month."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from shared.domain.value_objects import Month

from apps.reservations.domain.entities import DepositStatus, Interval, IntervalKind


@dataclass(frozen=True)
class OccupancySummary:
    month: Month
    guest_nights: int
    maintenance_nights: int
    days_in_month: int
    gross_revenue: Decimal
    maintenance_expenses: Decimal

    @property
    def occupancy_rate(self) -> float:
        """Share of the month's nights sold to guests, in percent"""
        if self.days_in_month <= 0:
            return 0.0
        return round(self.guest_nights / self.days_in_month * 100, 1)

    def to_dict(self) -> dict:
        return {
            'month': str(self.month),
            'guest_nights': self.guest_nights,
            'maintenance_nights': self.maintenance_nights,
            'days_in_month': self.days_in_month,
            'occupancy_rate': self.occupancy_rate,
            'gross_revenue': str(self.gross_revenue),
            'maintenance_expenses': str(self.maintenance_expenses),
        }


def month_occupancy(intervals: Iterable[Interval], month: Month) -> OccupancySummary:
    """
    Nights are clipped to the month, so a stay crossing the month
    boundary counts only its nights inside it. Money is attributed to
    the month the interval starts in.
    """
    window = month.dates
    nights = {IntervalKind.GUEST: 0, IntervalKind.MAINTENANCE: 0}
    revenue = Decimal('0.00')
    expenses = Decimal('0.00')

    for interval in intervals:
        clipped = interval.dates.clip(window)
        if clipped is not None:
            nights[interval.kind] += len(clipped)
        if window.contains(interval.check_in):
            revenue += interval.total_price
            expenses += interval.maintenance_expense

    return OccupancySummary(
        month=month,
        guest_nights=nights[IntervalKind.GUEST],
        maintenance_nights=nights[IntervalKind.MAINTENANCE],
        days_in_month=len(month),
        gross_revenue=revenue,
        maintenance_expenses=expenses,
    )


def pending_deposits(intervals: Iterable[Interval]) -> List[Interval]:
    """Guest stays holding a deposit that has not been returned yet"""
    return [
        interval for interval in intervals
        if interval.security_deposit > 0 and interval.deposit_status is not DepositStatus.RETURNED
    ]
