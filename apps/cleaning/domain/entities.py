"""
Cleaning Domain Entities

A cleaning task is created once, from a new guest stay that asked for
automatic cleaning. After that it lives on its own: editing or deleting
the task never touches the booking, and vice versa.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Entity
from shared.domain.value_objects import parse_amount


class CleaningStatus(Enum):
    """
    Cleaning task states

    Any state may move to any other; the owner corrects them by hand.
    """
    PENDING = 'pending'        # Created, nobody booked yet
    SCHEDULED = 'scheduled'    # Cleaner booked
    COMPLETED = 'completed'    # Done, cost can be logged as an expense
    MISSED = 'missed'          # Did not happen


@dataclass(eq=False)
class CleaningTask(Entity):
    """Turnover cleaning after a guest checks out"""

    property_id: object
    guest_name: str
    checkout_date: date
    status: CleaningStatus = CleaningStatus.PENDING
    cost: Decimal = Decimal('0.00')
    booking_id: UUID | None = None  # lookup only, the booking does not own the task

    @classmethod
    def from_request(cls, event, cost) -> 'CleaningTask':
        """Build the pending task for a CleaningRequested event"""
        return cls(
            property_id=event.property_id,
            guest_name=event.guest_name,
            checkout_date=event.checkout_date,
            cost=parse_amount(cost),
            booking_id=event.interval_id,
        )

    def change_status(self, status) -> None:
        self.status = status if isinstance(status, CleaningStatus) else CleaningStatus(status)

    @property
    def is_completed(self) -> bool:
        return self.status is CleaningStatus.COMPLETED

    def __str__(self):
        return f"Cleaning {self.checkout_date.isoformat()} after {self.guest_name} ({self.status.value})"
