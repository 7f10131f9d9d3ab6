"""
Reservation Domain Events

Events that represent things that have happened to a property's
intervals. They are collected on the IntervalStore aggregate and
published after the new state has been persisted.
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange


@dataclass(kw_only=True)
class IntervalAdded(DomainEvent):
    """Event: A guest stay or maintenance block was added"""
    property_id: object
    interval_id: UUID
    kind: str
    dates: DateRange


@dataclass(kw_only=True)
class IntervalUpdated(DomainEvent):
    """Event: An interval's dates or details were changed"""
    property_id: object
    interval_id: UUID
    previous_dates: DateRange
    dates: DateRange


@dataclass(kw_only=True)
class IntervalRemoved(DomainEvent):
    """
    Event: An interval was removed

    Cleaning tasks created for it are left alone; their lifecycle
    is independent of the booking.
    """
    property_id: object
    interval_id: UUID
    dates: DateRange


@dataclass(kw_only=True)
class CleaningRequested(DomainEvent):
    """
    Event: A new guest stay asked for an automatic cleaning

    Emitted once, at creation, for guest stays with auto_cleaning set.

    Triggers:
    - Cleaning app materialises a pending CleaningTask on the checkout date
    """
    property_id: object
    interval_id: UUID
    guest_name: str
    checkout_date: date

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'property_id': str(self.property_id),
            'interval_id': str(self.interval_id),
            'guest_name': self.guest_name,
            'checkout_date': self.checkout_date.isoformat(),
        })
        return data
