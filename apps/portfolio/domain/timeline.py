"""
Portfolio timeline

Projects every property's calendar-shaped data onto one month:
guest stays and maintenance blocks, the cleanings that follow them,
lease spans and their end dates, and unpaid installments. Each
(property, day) cell then gets at most one event, picked by tier:

    fill (occupied / leased days) > markers (lease end, payment due) > icons (cleaning)

Within a tier the category listed first in the enabled filter wins.
Rows are ordered by property type, then name.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

from shared.domain.value_objects import DateRange, Month

from apps.reservations.domain.entities import Interval

logger = logging.getLogger(__name__)


class TimelineCategory(Enum):
    """Filter toggles of the timeline view"""
    BOOKINGS = 'bookings'
    CLEANING = 'cleaning'
    LEASES = 'leases'
    PAYMENTS = 'payments'


DEFAULT_CATEGORIES: Tuple[TimelineCategory, ...] = tuple(TimelineCategory)


class EventType(Enum):
    BOOKING = 'booking'
    CLEANING = 'cleaning'
    LEASE = 'lease'
    LEASE_END = 'lease_end'
    PAYMENT = 'payment'


class Tier(IntEnum):
    """Lower value wins a shared cell"""
    FILL = 0
    MARKER = 1
    ICON = 2


@dataclass(frozen=True)
class Lease:
    """A tenant contract; both ends are inclusive, an open lease has no end_date"""
    tenant_name: str
    start_date: date
    end_date: date | None = None
    monthly_rent: Decimal = Decimal('0.00')


@dataclass(frozen=True)
class Installment:
    amount: Decimal
    due_date: date
    status: str = 'pending'

    @property
    def is_pending(self) -> bool:
        return self.status == 'pending'


@dataclass(frozen=True)
class PropertySnapshot:
    """Everything the timeline needs to know about one property"""
    id: object
    name: str
    property_type: str
    intervals: Tuple[Interval, ...] = ()
    leases: Tuple[Lease, ...] = ()
    installments: Tuple[Installment, ...] = ()

    @property
    def sort_key(self):
        return (self.property_type.casefold(), self.name.casefold())


@dataclass(frozen=True)
class TimelineEvent:
    property_id: object
    day: date
    event_type: EventType
    category: TimelineCategory
    tier: Tier
    label: str
    is_start: bool = False
    details: dict = field(default_factory=dict, compare=False)

    @property
    def is_fill(self) -> bool:
        return self.tier is Tier.FILL

    def to_dict(self) -> dict:
        return {
            'property_id': str(self.property_id),
            'date': self.day.isoformat(),
            'type': self.event_type.value,
            'category': self.category.value,
            'label': self.label,
            'is_start': self.is_start,
            'is_fill': self.is_fill,
            'details': self.details,
        }


@dataclass(frozen=True)
class TimelineCell:
    day: date
    event: TimelineEvent | None = None


@dataclass(frozen=True)
class TimelineRow:
    property: PropertySnapshot
    cells: Tuple[TimelineCell, ...]


@dataclass(frozen=True)
class PortfolioTimeline:
    month: Month
    categories: Tuple[TimelineCategory, ...]
    days: Tuple[date, ...]
    events: Tuple[TimelineEvent, ...]
    rows: Tuple[TimelineRow, ...]

    def events_for(self, property_id) -> List[TimelineEvent]:
        return [event for event in self.events if event.property_id == property_id]


def parse_categories(values: Iterable[str]) -> Tuple[TimelineCategory, ...]:
    """
    Read an ordered category filter; duplicates keep their first position

    Raises:
        ValueError: On an unknown category name
    """
    categories: List[TimelineCategory] = []
    for value in values:
        category = TimelineCategory(value.strip())
        if category not in categories:
            categories.append(category)
    return tuple(categories)


class PortfolioTimelineAggregator:
    """
    Builds the multi-property month timeline

    Stateless; one instance can serve any number of queries. Each
    property is projected independently of the others.
    """

    def build(
        self,
        properties: Iterable[PropertySnapshot],
        month: Month,
        categories: Sequence[TimelineCategory] = DEFAULT_CATEGORIES,
    ) -> PortfolioTimeline:
        categories = tuple(categories)
        window = month.dates
        days = tuple(window.days())
        rank = {category: index for index, category in enumerate(categories)}

        all_events: List[TimelineEvent] = []
        rows: List[TimelineRow] = []
        for snapshot in sorted(properties, key=lambda p: p.sort_key):
            events = self.project(snapshot, window, categories)
            all_events.extend(events)
            rows.append(TimelineRow(property=snapshot, cells=self._resolve(days, events, rank)))

        logger.debug("Built timeline for %s: %d properties, %d events", month, len(rows), len(all_events))
        return PortfolioTimeline(
            month=month,
            categories=categories,
            days=days,
            events=tuple(all_events),
            rows=tuple(rows),
        )

    def project(
        self,
        snapshot: PropertySnapshot,
        window: DateRange,
        categories: Sequence[TimelineCategory],
    ) -> List[TimelineEvent]:
        """All events of one property falling inside the window, in emission order"""
        events: List[TimelineEvent] = []
        if TimelineCategory.BOOKINGS in categories:
            events.extend(self._interval_events(snapshot, window))
        if TimelineCategory.CLEANING in categories:
            events.extend(self._cleaning_events(snapshot, window))
        if TimelineCategory.LEASES in categories:
            events.extend(self._lease_events(snapshot, window))
        if TimelineCategory.PAYMENTS in categories:
            events.extend(self._payment_events(snapshot, window))
        return events

    def _interval_events(self, snapshot: PropertySnapshot, window: DateRange) -> Iterable[TimelineEvent]:
        for interval in snapshot.intervals:
            visible = interval.dates.clip(window)
            if visible is None:
                continue
            details = {
                'interval_id': str(interval.id),
                'kind': interval.kind.value,
                'guest_name': interval.guest_name,
                'check_in': interval.check_in.isoformat(),
                'check_out': interval.check_out.isoformat(),
                'total_price': str(interval.total_price),
            }
            for day in visible.days():
                yield TimelineEvent(
                    property_id=snapshot.id,
                    day=day,
                    event_type=EventType.BOOKING,
                    category=TimelineCategory.BOOKINGS,
                    tier=Tier.FILL,
                    label=interval.guest_name,
                    is_start=day == interval.check_in,
                    details=details,
                )

    def _cleaning_events(self, snapshot: PropertySnapshot, window: DateRange) -> Iterable[TimelineEvent]:
        for interval in snapshot.intervals:
            if not interval.is_guest or not window.contains(interval.check_out):
                continue
            yield TimelineEvent(
                property_id=snapshot.id,
                day=interval.check_out,
                event_type=EventType.CLEANING,
                category=TimelineCategory.CLEANING,
                tier=Tier.ICON,
                label='Cleaning',
                details={'interval_id': str(interval.id), 'guest_name': interval.guest_name},
            )

    def _lease_events(self, snapshot: PropertySnapshot, window: DateRange) -> Iterable[TimelineEvent]:
        last_visible = window.end_date - timedelta(days=1)
        for lease in snapshot.leases:
            label = lease.tenant_name or 'Tenant'
            details = {
                'tenant': label,
                'start': lease.start_date.isoformat(),
                'end': lease.end_date.isoformat() if lease.end_date else None,
                'rent': str(lease.monthly_rent),
            }

            first = max(lease.start_date, window.start_date)
            last = min(lease.end_date, last_visible) if lease.end_date else last_visible
            day = first
            while day <= last:
                yield TimelineEvent(
                    property_id=snapshot.id,
                    day=day,
                    event_type=EventType.LEASE,
                    category=TimelineCategory.LEASES,
                    tier=Tier.FILL,
                    label=label,
                    # The label is repeated at the top of every month the lease runs through
                    is_start=day == lease.start_date or day == window.start_date,
                    details=details,
                )
                day += timedelta(days=1)

            if lease.end_date and window.contains(lease.end_date):
                yield TimelineEvent(
                    property_id=snapshot.id,
                    day=lease.end_date,
                    event_type=EventType.LEASE_END,
                    category=TimelineCategory.LEASES,
                    tier=Tier.MARKER,
                    label=label,
                    details={'tenant': label, 'end': lease.end_date.isoformat()},
                )

    def _payment_events(self, snapshot: PropertySnapshot, window: DateRange) -> Iterable[TimelineEvent]:
        for installment in snapshot.installments:
            if not installment.is_pending or not window.contains(installment.due_date):
                continue
            yield TimelineEvent(
                property_id=snapshot.id,
                day=installment.due_date,
                event_type=EventType.PAYMENT,
                category=TimelineCategory.PAYMENTS,
                tier=Tier.MARKER,
                label='Payment due',
                details={'amount': str(installment.amount), 'due': installment.due_date.isoformat()},
            )

    @staticmethod
    def _resolve(
        days: Sequence[date],
        events: Sequence[TimelineEvent],
        rank: Dict[TimelineCategory, int],
    ) -> Tuple[TimelineCell, ...]:
        winners: Dict[date, Tuple[tuple, TimelineEvent]] = {}
        for order, event in enumerate(events):
            key = (event.tier, rank[event.category], order)
            current = winners.get(event.day)
            if current is None or key < current[0]:
                winners[event.day] = (key, event)
        return tuple(
            TimelineCell(day=day, event=winners[day][1] if day in winners else None)
            for day in days
        )
