"""
Domain building blocks

Shared by every bounded context of the portfolio:
- Entity: has an identity that survives changes to its fields
- ValueObject: immutable, equal when all fields are equal
- Aggregate: an entity that records what happened to it as DomainEvents
- DomainEvent: a fact, published once the change behind it is stored

Identity and event metadata are keyword-only, so concrete entities and
events can declare required positional fields of their own.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass(kw_only=True)
class Entity(ABC):
    """
    Base class for entities

    Equality and hashing go by ``id`` only; two snapshots of the same
    interval compare equal even if their dates differ.
    """
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value compared field by field"""


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Aggregate root

    Mutating methods record events with ``add_event``. The unit of work
    takes them with ``pull_events`` after the new state is saved; an
    aggregate that is thrown away simply drops them.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    def pull_events(self) -> List['DomainEvent']:
        """Return the recorded events and forget them"""
        events, self._events = self._events, []
        return events

    @property
    def events(self) -> List['DomainEvent']:
        """Recorded events, oldest first (a copy)"""
        return list(self._events)


@dataclass(kw_only=True)
class DomainEvent:
    """
    Something that happened to an aggregate

    Handlers in other apps subscribe to concrete subclasses on the
    message bus.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: UUID | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Envelope fields; subclasses add their payload"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.name,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
        }
