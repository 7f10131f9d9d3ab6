"""
Reservation Command Handlers

Use cases for a property's calendar. Each handler runs one store
operation inside a unit of work:

1. Open a DjangoUnitOfWork (transaction.atomic)
2. Load the property's IntervalStore and remember the calendar version
3. Run the store operation; a failed Result rolls back and is returned
4. Save the new interval set, guarded by the version read in step 2
5. Collect the store's events; they are published after commit

Commands:
- CreateIntervalCommand: Add a guest stay or maintenance block
- UpdateIntervalCommand: Patch an existing interval
- RemoveIntervalCommand: Delete an interval
"""

from dataclasses import dataclass, field
from typing import Any, Dict
from uuid import UUID
import logging

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.result import Result

from apps.reservations.domain.entities import IntervalDraft
from apps.reservations.domain.errors import NotFoundError
from apps.reservations.domain.ports import IntervalRepository
from apps.reservations.domain.store import IntervalStore

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateIntervalCommand:
    property_id: Any
    draft: IntervalDraft


@dataclass
class UpdateIntervalCommand:
    property_id: Any
    interval_id: UUID
    patch: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RemoveIntervalCommand:
    property_id: Any
    interval_id: UUID


# ===== Command Handlers =====

class _IntervalCommandHandler:
    """Shared load / save / collect cycle"""

    def __init__(self, repository: IntervalRepository, bus: MessageBus | None = None):
        self.repository = repository
        self.bus = bus

    def _run(self, property_id, operation) -> Result:
        with DjangoUnitOfWork(bus=self.bus) as uow:
            try:
                version = self.repository.current_version(property_id)
            except NotFoundError as exc:
                uow.rollback()
                return Result.failure(exc)
            loaded = IntervalStore.load(property_id, self.repository.load_intervals(property_id))
            if not loaded.ok:
                logger.error("Stored calendar of property %s is invalid: %s", property_id, loaded.error)
                uow.rollback()
                return loaded
            store = loaded.value

            result = operation(store)
            if not result.ok:
                uow.rollback()
                return result

            saved = self.repository.save_intervals(property_id, store.list(), expected_version=version)
            if not saved.ok:
                uow.rollback()
                return saved

            uow.collect_events(store)
        return result


class CreateIntervalHandler(_IntervalCommandHandler):

    def handle(self, command: CreateIntervalCommand) -> Result:
        logger.info("Creating interval for property %s: %s -> %s",
                    command.property_id, command.draft.check_in, command.draft.check_out)
        return self._run(command.property_id, lambda store: store.add(command.draft))

    __call__ = handle


class UpdateIntervalHandler(_IntervalCommandHandler):

    def handle(self, command: UpdateIntervalCommand) -> Result:
        logger.info("Updating interval %s of property %s (%s)",
                    command.interval_id, command.property_id, ', '.join(sorted(command.patch)))
        return self._run(command.property_id, lambda store: store.update(command.interval_id, command.patch))

    __call__ = handle


class RemoveIntervalHandler(_IntervalCommandHandler):

    def handle(self, command: RemoveIntervalCommand) -> Result:
        logger.info("Removing interval %s of property %s", command.interval_id, command.property_id)
        return self._run(command.property_id, lambda store: store.remove(command.interval_id))

    __call__ = handle


def register_handlers(bus: MessageBus, repository: IntervalRepository | None = None):
    """Wire the reservation commands onto ``bus``"""
    if bus.has_command_handler(CreateIntervalCommand):
        return
    if repository is None:
        from apps.reservations.repository import DjangoIntervalRepository
        repository = DjangoIntervalRepository()

    bus.register_command_handler(CreateIntervalCommand, CreateIntervalHandler(repository, bus))
    bus.register_command_handler(UpdateIntervalCommand, UpdateIntervalHandler(repository, bus))
    bus.register_command_handler(RemoveIntervalCommand, RemoveIntervalHandler(repository, bus))
