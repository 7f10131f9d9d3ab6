"""
Persistence port

The reservation domain never touches storage itself. Whatever stores a
property's intervals implements this protocol; both calls are
all-or-nothing.
"""

from typing import Iterable, List, Protocol

from shared.domain.result import Result

from apps.reservations.domain.entities import Interval


class IntervalRepository(Protocol):

    def load_intervals(self, property_id) -> List[dict]:
        """Raw interval records for a property, in any order"""
        ...

    def save_intervals(self, property_id, intervals: Iterable[Interval], expected_version=None) -> Result[int]:
        """
        Replace a property's intervals with ``intervals``

        Returns the new calendar version, or a ConflictError when
        ``expected_version`` no longer matches what is stored.
        """
        ...

    def current_version(self, property_id) -> int:
        ...
