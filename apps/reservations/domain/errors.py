"""
Reservation Domain Errors

All three are deterministic outcomes of validating in-memory data;
none of them is worth retrying with the same input.
"""

from typing import Iterable
from uuid import UUID


class ReservationError(Exception):
    """Base class for refusals produced by the reservation domain"""

    code = 'reservation_error'

    def to_dict(self) -> dict:
        return {'code': self.code, 'detail': str(self)}


class ValidationError(ReservationError):
    """
    Malformed or out-of-range input

    Zero-length or inverted intervals, unparsable dates, a missing
    guest name, negative money, unknown patch fields.
    """

    code = 'validation_error'

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.field:
            data['field'] = self.field
        return data


class ConflictError(ReservationError):
    """The candidate overlaps one or more existing intervals"""

    code = 'conflict'

    def __init__(self, conflicting_ids: Iterable[UUID], message: str | None = None):
        self.conflicting_ids = list(conflicting_ids)
        if message is None:
            joined = ', '.join(str(i) for i in self.conflicting_ids)
            message = f"Dates overlap with existing interval(s): {joined}"
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['conflicting_ids'] = [str(i) for i in self.conflicting_ids]
        return data


class NotFoundError(ReservationError):
    """Update or removal referencing an id absent from the store"""

    code = 'not_found'

    def __init__(self, interval_id):
        self.interval_id = interval_id
        super().__init__(f"Interval {interval_id} not found")
