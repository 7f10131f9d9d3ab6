"""
Cleaning Event Handlers and Use Cases

Cleaning tasks come into existence when a new guest stay asks for one
(CleaningRequested, published after the reservation commit). From then
on they are edited and deleted on their own; reservation changes never
reach back into them.
"""

from typing import Iterable
import logging

from django.db import transaction  # type: ignore

from shared.application.message_bus import MessageBus
from shared.domain.result import Result

from apps.cleaning.domain.entities import CleaningStatus, CleaningTask
from apps.cleaning.models import CleaningTask as CleaningTaskModel
from apps.properties.models import Property
from apps.reservations.domain.errors import NotFoundError, ValidationError
from apps.reservations.domain.events import CleaningRequested

logger = logging.getLogger(__name__)


def handle_cleaning_requested(event: CleaningRequested) -> None:
    """Materialise a pending cleaning task priced at the property's cleaning fee"""
    cleaning_fee = (
        Property.objects.filter(pk=event.property_id)
        .values_list("cleaning_fee", flat=True)
        .first()
    )
    if cleaning_fee is None:
        logger.warning("Cleaning requested for unknown property %s", event.property_id)
        return

    task = CleaningTask.from_request(event, cleaning_fee)
    CleaningTaskModel.objects.create(
        uid=task.id,
        property_id=task.property_id,
        booking_uid=task.booking_id,
        guest_name=task.guest_name,
        checkout_date=task.checkout_date,
        status=task.status.value,
        cost=task.cost,
    )
    logger.info("Created %s", task)


def list_cleaning_tasks(property_id) -> Iterable[CleaningTaskModel]:
    return CleaningTaskModel.objects.filter(property_id=property_id)


@transaction.atomic
def update_cleaning_status(property_id, task_id, status) -> Result[CleaningTaskModel]:
    row = CleaningTaskModel.objects.select_for_update().filter(property_id=property_id, uid=task_id).first()
    if row is None:
        return Result.failure(NotFoundError(task_id))

    task = _to_entity(row)
    previous = task.status
    try:
        task.change_status(status)
    except ValueError:
        allowed = ', '.join(member.value for member in CleaningStatus)
        return Result.failure(ValidationError(f"status must be one of: {allowed}", field='status'))

    row.status = task.status.value
    row.save(update_fields=["status", "updated_at"])
    logger.info("STATE_TRANSITION %s → %s cleaning=%s", previous.value, task.status.value, task_id)
    return Result.success(row)


@transaction.atomic
def delete_cleaning_task(property_id, task_id) -> Result[None]:
    deleted, _ = CleaningTaskModel.objects.filter(property_id=property_id, uid=task_id).delete()
    if not deleted:
        return Result.failure(NotFoundError(task_id))
    logger.info("Deleted cleaning task %s of property %s", task_id, property_id)
    return Result.success(None)


def _to_entity(row: CleaningTaskModel) -> CleaningTask:
    return CleaningTask(
        id=row.uid,
        created_at=row.created_at,
        property_id=row.property_id,
        guest_name=row.guest_name,
        checkout_date=row.checkout_date,
        status=CleaningStatus(row.status),
        cost=row.cost,
        booking_id=row.booking_uid,
    )


def register_handlers(bus: MessageBus):
    bus.register_event_handler(CleaningRequested, handle_cleaning_requested)
