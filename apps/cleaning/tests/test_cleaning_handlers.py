"""Tests for cleaning task use cases."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.cleaning.application.handlers import (
    delete_cleaning_task,
    handle_cleaning_requested,
    update_cleaning_status,
)
from apps.cleaning.models import CleaningTask
from apps.properties.models import Property
from apps.reservations.domain.errors import NotFoundError, ValidationError
from apps.reservations.domain.events import CleaningRequested

pytestmark = pytest.mark.django_db


@pytest.fixture
def cottage(django_user_model):
    owner = django_user_model.objects.create_user(username="host", password="HostPass123")
    return Property.objects.create(owner=owner, name="Cottage", cleaning_fee=Decimal("30.00"))


def _request(property_id, **overrides):
    values = {
        "property_id": property_id,
        "interval_id": uuid4(),
        "guest_name": "Dana",
        "checkout_date": date(2026, 6, 4),
    }
    values.update(overrides)
    return CleaningRequested(**values)


def test_request_creates_pending_task_at_cleaning_fee(cottage):
    event = _request(cottage.pk)

    handle_cleaning_requested(event)

    task = CleaningTask.objects.get()
    assert task.property == cottage
    assert task.booking_uid == event.interval_id
    assert task.guest_name == "Dana"
    assert task.checkout_date == date(2026, 6, 4)
    assert task.status == CleaningTask.Status.PENDING
    assert task.cost == Decimal("30.00")


def test_request_for_unknown_property_is_ignored():
    handle_cleaning_requested(_request(12345))

    assert not CleaningTask.objects.exists()


def test_status_can_move_in_any_direction(cottage):
    handle_cleaning_requested(_request(cottage.pk))
    task = CleaningTask.objects.get()

    completed = update_cleaning_status(cottage.pk, task.uid, "completed")
    reopened = update_cleaning_status(cottage.pk, task.uid, "scheduled")

    assert completed.ok
    assert reopened.value.status == "scheduled"
    task.refresh_from_db()
    assert task.status == CleaningTask.Status.SCHEDULED


def test_unknown_status_and_task(cottage):
    handle_cleaning_requested(_request(cottage.pk))
    task = CleaningTask.objects.get()

    assert isinstance(update_cleaning_status(cottage.pk, task.uid, "lost").error, ValidationError)
    assert isinstance(update_cleaning_status(cottage.pk, uuid4(), "completed").error, NotFoundError)


def test_delete_scoped_to_property(cottage, django_user_model):
    handle_cleaning_requested(_request(cottage.pk))
    task = CleaningTask.objects.get()
    elsewhere = Property.objects.create(owner=cottage.owner, name="Elsewhere")

    assert isinstance(delete_cleaning_task(elsewhere.pk, task.uid).error, NotFoundError)
    assert delete_cleaning_task(cottage.pk, task.uid).ok
    assert not CleaningTask.objects.exists()
