"""
IntervalStore Aggregate

The consistency boundary for one property's calendar. All changes to a
property's guest stays and maintenance blocks go through this aggregate,
which guarantees that no two stored intervals overlap.

Operations return a Result rather than raising: refusing a booking is an
ordinary outcome, not an error in the program. The store performs no
I/O; persisting the new state is the caller's next step.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List
import logging
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.result import Result

from apps.reservations.domain.entities import Interval, IntervalDraft
from apps.reservations.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from apps.reservations.domain.events import (
    CleaningRequested,
    IntervalAdded,
    IntervalRemoved,
    IntervalUpdated,
)
from apps.reservations.domain.overlap import find_conflicts

logger = logging.getLogger(__name__)


@dataclass(kw_only=True, eq=False)
class IntervalStore(Aggregate):
    """
    IntervalStore Aggregate Root

    Key invariants:
    - No two intervals overlap under [check_in, check_out) semantics
    - Every stored interval passed IntervalDraft validation
    - Enforced on load, add and update alike

    Usage:
        store = IntervalStore.load(property_id, records).unwrap()
        result = store.add(IntervalDraft(check_in='2026-01-01', check_out='2026-01-05',
                                         guest_name='Anna'))
        if result.ok:
            repository.save_intervals(property_id, store.list())
        else:
            explain(result.error)
    """

    property_id: object
    _intervals: List[Interval] = field(default_factory=list, repr=False, init=False)

    @classmethod
    def load(cls, property_id, records: Iterable[dict]) -> Result['IntervalStore']:
        """
        Build a store from raw persistence records

        Loaded data goes through the same checks as ``add``; the first
        invalid or overlapping record fails the whole load. Loading
        emits no events.
        """
        store = cls(property_id=property_id)
        for record in records:
            try:
                interval = IntervalDraft.from_record(record).build()
            except ValidationError as exc:
                logger.warning("Invalid stored interval for property %s: %s", property_id, exc)
                return Result.failure(exc)

            if any(existing.id == interval.id for existing in store._intervals):
                return Result.failure(ValidationError(f"Duplicate interval id {interval.id}", field='id'))

            conflicts = find_conflicts(interval, store._intervals)
            if conflicts:
                logger.warning("Stored intervals overlap for property %s: %s", property_id, interval.id)
                return Result.failure(ConflictError([c.id for c in conflicts]))
            store._intervals.append(interval)

        store._sort()
        return Result.success(store)

    def list(self) -> List[Interval]:
        """All intervals sorted by check-in; a snapshot, not a live view"""
        return list(self._intervals)

    def get(self, interval_id: UUID) -> Result[Interval]:
        interval = self._find(interval_id)
        if interval is None:
            return Result.failure(NotFoundError(interval_id))
        return Result.success(interval)

    def add(self, candidate: IntervalDraft) -> Result[Interval]:
        """
        Add a new interval

        The candidate gets a fresh id and creation time. Overlap is
        checked against every stored interval; nothing is clamped or
        moved to make room.

        Events: IntervalAdded, plus CleaningRequested for guest stays
        with auto_cleaning set.
        """
        try:
            interval = replace(candidate, id=None, created_at=None).build()
        except ValidationError as exc:
            logger.warning("Rejected interval for property %s: %s", self.property_id, exc)
            return Result.failure(exc)

        conflicts = find_conflicts(interval, self._intervals)
        if conflicts:
            error = ConflictError([c.id for c in conflicts])
            logger.warning("Rejected interval %s for property %s: %s", interval.dates, self.property_id, error)
            return Result.failure(error)

        self._intervals.append(interval)
        self._sort()
        logger.info("Added %s interval %s (%s) to property %s",
                    interval.kind.value, interval.id, interval.dates, self.property_id)

        self.add_event(IntervalAdded(
            aggregate_id=self.id,
            property_id=self.property_id,
            interval_id=interval.id,
            kind=interval.kind.value,
            dates=interval.dates,
        ))
        if interval.auto_cleaning:
            self.add_event(CleaningRequested(
                aggregate_id=self.id,
                property_id=self.property_id,
                interval_id=interval.id,
                guest_name=interval.guest_name,
                checkout_date=interval.check_out,
            ))
        return Result.success(interval)

    def update(self, interval_id: UUID, patch: dict) -> Result[Interval]:
        """
        Apply a patch of draft field values to an existing interval

        The patched interval is re-validated and checked for overlap
        against every other interval (itself excluded). Id and creation
        time are kept.

        Events: IntervalUpdated
        """
        current = self._find(interval_id)
        if current is None:
            return Result.failure(NotFoundError(interval_id))

        unknown = set(patch) - IntervalDraft.field_names()
        if unknown:
            return Result.failure(ValidationError(
                f"Unknown field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0]))

        draft = replace(current.to_draft(), **patch)
        draft.id = current.id
        draft.created_at = current.created_at
        try:
            updated = draft.build()
        except ValidationError as exc:
            logger.warning("Rejected update of %s: %s", interval_id, exc)
            return Result.failure(exc)

        conflicts = find_conflicts(updated, self._intervals, exclude_id=current.id)
        if conflicts:
            error = ConflictError([c.id for c in conflicts])
            logger.warning("Rejected update of %s to %s: %s", interval_id, updated.dates, error)
            return Result.failure(error)

        index = self._intervals.index(current)
        self._intervals[index] = updated
        self._sort()
        logger.info("Updated interval %s: %s -> %s", interval_id, current.dates, updated.dates)

        self.add_event(IntervalUpdated(
            aggregate_id=self.id,
            property_id=self.property_id,
            interval_id=updated.id,
            previous_dates=current.dates,
            dates=updated.dates,
        ))
        return Result.success(updated)

    def remove(self, interval_id: UUID) -> Result[None]:
        """
        Remove an interval, freeing its dates

        Events: IntervalRemoved
        """
        current = self._find(interval_id)
        if current is None:
            return Result.failure(NotFoundError(interval_id))

        self._intervals.remove(current)
        logger.info("Removed interval %s (%s) from property %s", interval_id, current.dates, self.property_id)

        self.add_event(IntervalRemoved(
            aggregate_id=self.id,
            property_id=self.property_id,
            interval_id=current.id,
            dates=current.dates,
        ))
        return Result.success(None)

    def _find(self, interval_id) -> Interval | None:
        return next((i for i in self._intervals if str(i.id) == str(interval_id)), None)

    def _sort(self):
        self._intervals.sort(key=lambda interval: interval.check_in)

    def __len__(self):
        return len(self._intervals)

    def __str__(self):
        return f"IntervalStore(property={self.property_id}, intervals={len(self._intervals)})"
