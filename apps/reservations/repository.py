"""
Django ORM persistence for property calendars

Implements the IntervalRepository port. A save replaces the property's
whole interval set in one transaction; the property's calendar_version
is the optimistic concurrency token.
"""

from __future__ import annotations

from typing import Iterable, List
import logging

from django.db import transaction  # type: ignore
from django.db.models import F, Prefetch  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.result import Result

from apps.portfolio.domain.timeline import Installment, Lease, PropertySnapshot
from apps.properties.models import Installment as InstallmentModel
from apps.properties.models import Property
from apps.reservations.domain.entities import Interval, IntervalDraft
from apps.reservations.domain.errors import ConflictError, NotFoundError, ValidationError

from .models import Reservation

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _aware(value):
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


class DjangoIntervalRepository:
    """Stores each interval as one Reservation row."""

    def load_intervals(self, property_id) -> List[dict]:
        return [
            reservation.to_record()
            for reservation in Reservation.objects.filter(property_id=property_id)
        ]

    def current_version(self, property_id) -> int:
        try:
            properties = _lock_queryset_if_possible(Property.objects.filter(pk=property_id))
            return properties.values_list("calendar_version", flat=True).get()
        except Property.DoesNotExist:
            raise NotFoundError(property_id) from None

    def save_intervals(self, property_id, intervals: Iterable[Interval], expected_version=None) -> Result[int]:
        intervals = list(intervals)
        with transaction.atomic():
            properties = _lock_queryset_if_possible(Property.objects.filter(pk=property_id))
            version = properties.values_list("calendar_version", flat=True).first()
            if version is None:
                return Result.failure(NotFoundError(property_id))

            if expected_version is not None and version != expected_version:
                logger.warning(
                    "Stale calendar write for property %s: expected version %s, found %s",
                    property_id, expected_version, version,
                )
                return Result.failure(ConflictError(
                    [],
                    message="The calendar was changed by someone else; reload and try again.",
                ))

            Reservation.objects.filter(property_id=property_id).exclude(
                uid__in=[interval.id for interval in intervals],
            ).delete()
            for interval in intervals:
                Reservation.objects.update_or_create(
                    uid=interval.id,
                    defaults=self._row(property_id, interval),
                )

            Property.objects.filter(pk=property_id).update(calendar_version=F("calendar_version") + 1)

        logger.info("Saved %d interval(s) for property %s (version %s)", len(intervals), property_id, version + 1)
        return Result.success(version + 1)

    @staticmethod
    def _row(property_id, interval: Interval) -> dict:
        return {
            "property_id": property_id,
            "kind": interval.kind.value,
            "check_in": interval.check_in,
            "check_out": interval.check_out,
            "guest_name": interval.guest_name,
            "total_price": interval.total_price,
            "security_deposit": interval.security_deposit,
            "maintenance_expense": interval.maintenance_expense,
            "deposit_status": interval.deposit_status.value,
            "auto_cleaning": interval.auto_cleaning,
            "notes": interval.notes,
            "created_at": _aware(interval.created_at),
        }


def build_portfolio_snapshots(properties=None) -> List[PropertySnapshot]:
    """
    Load properties with everything the portfolio timeline projects

    Stored rows that no longer pass interval validation are skipped with
    a warning so one bad record does not blank the whole portfolio.
    """
    if properties is None:
        properties = Property.objects.all()
    properties = properties.prefetch_related(
        "reservations",
        "leases",
        Prefetch(
            "installments",
            queryset=InstallmentModel.objects.filter(status=InstallmentModel.Status.PENDING),
        ),
    )

    snapshots = []
    for prop in properties:
        intervals = []
        for reservation in prop.reservations.all():
            try:
                intervals.append(IntervalDraft.from_record(reservation.to_record()).build())
            except ValidationError as exc:
                logger.warning("Skipping invalid reservation %s: %s", reservation.uid, exc)

        snapshots.append(PropertySnapshot(
            id=prop.pk,
            name=prop.name,
            property_type=prop.property_type,
            intervals=tuple(intervals),
            leases=tuple(
                Lease(
                    tenant_name=lease.tenant_name,
                    start_date=lease.start_date,
                    end_date=lease.end_date,
                    monthly_rent=lease.monthly_rent,
                )
                for lease in prop.leases.all()
            ),
            installments=tuple(
                Installment(amount=item.amount, due_date=item.due_date, status=item.status)
                for item in prop.installments.all()
            ),
        ))
    return snapshots
