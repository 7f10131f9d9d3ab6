"""
Unit of Work

One calendar change is one database transaction. Events recorded by the
aggregates touched inside it reach the message bus only once that
transaction has committed, so a cleaning task is never created for a
booking that was rolled back.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import transaction

from shared.domain.base import Aggregate, DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        ...

    @abstractmethod
    def rollback(self):
        ...

    @abstractmethod
    def collect_events(self, aggregate: Aggregate):
        ...


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    ``transaction.atomic`` plus deferred event publishing

    Handlers that get a failed Result from the domain call ``rollback()``
    and return normally: the atomic block is marked for rollback and the
    pending events are dropped. An exception escaping the block rolls
    back the same way.

        with DjangoUnitOfWork(bus) as uow:
            result = store.add(draft)
            if not result.ok:
                uow.rollback()
                return result
            repository.save_intervals(property_id, store.list())
            uow.collect_events(store)
    """

    def __init__(self, bus=None):
        self._bus = bus
        self._events: List[DomainEvent] = []
        self._atomic = None
        self._rolled_back = False

    def __enter__(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                self.rollback()
            elif not self._rolled_back:
                self.commit()
        finally:
            if self._atomic is not None:
                self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        events, self._events = self._events, []
        logger.debug("Committing unit of work with %d pending event(s)", len(events))
        if events:
            transaction.on_commit(lambda: self._publish(events))

    def rollback(self):
        if self._events:
            logger.warning("Rolling back, dropping %d pending event(s)", len(self._events))
        self._events = []
        self._rolled_back = True
        if transaction.get_connection().in_atomic_block:
            transaction.set_rollback(True)

    def collect_events(self, aggregate: Aggregate):
        events = aggregate.pull_events()
        if events:
            self._events.extend(events)
            logger.debug("Collected %d event(s) from %s %s", len(events), type(aggregate).__name__, aggregate.id)

    def _publish(self, events: List[DomainEvent]):
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info("Publishing %d event(s) after commit", len(events))
        failures = bus.publish_events(events)
        if failures:
            # The transaction is already committed; failures are only reported
            logger.error("%d event handler(s) failed after commit", failures)
