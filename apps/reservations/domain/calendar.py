"""
Availability calendar

Month view of one property plus the two-click date picker used to
create or edit an interval.

Picker states:
- IDLE -> CHECK_IN_CHOSEN     (a selectable start day was clicked)
- CHECK_IN_CHOSEN -> CHECK_IN_CHOSEN (an earlier selectable day replaces check-in,
                                      or a double booking was refused)
- CHECK_IN_CHOSEN -> RANGE_CHOSEN    (a legal check-out day was clicked)
- RANGE_CHOSEN -> CHECK_IN_CHOSEN    (a selectable start day starts over)
- any -> IDLE                        (cancel)

Confirming hands the range to the caller, which still commits it
through IntervalStore; the store repeats the overlap check.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterable, List
import logging
from uuid import UUID

from shared.domain.result import Result
from shared.domain.value_objects import DateRange, Month

from apps.reservations.domain.classifier import DayClassification, classify_day
from apps.reservations.domain.entities import Interval
from apps.reservations.domain.errors import ValidationError
from apps.reservations.domain.overlap import range_contains_blocked_date

logger = logging.getLogger(__name__)

DOUBLE_BOOKING_MESSAGE = "These dates overlap with an existing booking."


class PickerState(Enum):
    IDLE = 'idle'
    CHECK_IN_CHOSEN = 'check_in_chosen'
    RANGE_CHOSEN = 'range_chosen'


class ClickOutcome(Enum):
    IGNORED = 'ignored'                # Past or non-selectable day
    CHECK_IN_SET = 'check_in_set'
    CHECK_OUT_SET = 'check_out_set'
    DOUBLE_BOOKING = 'double_booking'  # Range would jump over a booking


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid"""
    classification: DayClassification
    is_past: bool
    is_today: bool
    is_check_in: bool
    is_check_out: bool
    in_selected_range: bool
    selectable_as_start: bool

    @property
    def day(self) -> date:
        return self.classification.day

    def to_dict(self) -> dict:
        data = self.classification.to_dict()
        data.update({
            'is_past': self.is_past,
            'is_today': self.is_today,
            'is_check_in': self.is_check_in,
            'is_check_out': self.is_check_out,
            'in_selected_range': self.in_selected_range,
            'selectable_as_start': self.selectable_as_start,
        })
        return data


class AvailabilityCalendar:
    """
    Availability calendar for one property

    ``today`` is passed in so the calendar holds no hidden clock.
    ``editing_id`` names the interval being edited; it is left out while
    picking so its own days can be chosen again.
    """

    def __init__(
        self,
        intervals: Iterable[Interval],
        today: date,
        month: Month | None = None,
        editing_id: UUID | None = None,
        on_confirm: Callable[[DateRange], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ):
        self.intervals: List[Interval] = [
            interval for interval in intervals
            if editing_id is None or str(interval.id) != str(editing_id)
        ]
        self.today = today
        self.month = month or Month.of(today)
        self.editing_id = editing_id
        self.on_confirm = on_confirm
        self.on_cancel = on_cancel

        self.state = PickerState.IDLE
        self.check_in: date | None = None
        self.check_out: date | None = None
        self.error: str | None = None

    # ----- month view -----

    def prev_month(self) -> Month:
        self.month = self.month.previous()
        return self.month

    def next_month(self) -> Month:
        self.month = self.month.next()
        return self.month

    def classify(self, day: date) -> DayClassification:
        return classify_day(day, self.intervals)

    def month_days(self) -> List[CalendarDay]:
        """Every day of the visible month with its status and selection flags"""
        return [self._calendar_day(day) for day in self.month.dates.days()]

    def _calendar_day(self, day: date) -> CalendarDay:
        classification = self.classify(day)
        is_past = day < self.today
        return CalendarDay(
            classification=classification,
            is_past=is_past,
            is_today=day == self.today,
            is_check_in=day == self.check_in,
            is_check_out=day == self.check_out,
            in_selected_range=(
                self.check_in is not None
                and self.check_out is not None
                and self.check_in <= day <= self.check_out
            ),
            selectable_as_start=not is_past and not classification.blocks_check_in,
        )

    # ----- picker -----

    def is_selectable_start(self, day: date) -> bool:
        if day < self.today:
            return False
        return not self.classify(day).blocks_check_in

    def click(self, day: date) -> ClickOutcome:
        """Feed a clicked day into the picker"""
        if day < self.today:
            return ClickOutcome.IGNORED

        if self.state is PickerState.CHECK_IN_CHOSEN and day > self.check_in:
            return self._choose_check_out(day)

        # IDLE, RANGE_CHOSEN, or an earlier/equal day while CHECK_IN_CHOSEN
        if not self.is_selectable_start(day):
            return ClickOutcome.IGNORED
        self._transition(PickerState.CHECK_IN_CHOSEN, f"check_in={day}")
        self.check_in = day
        self.check_out = None
        self.error = None
        return ClickOutcome.CHECK_IN_SET

    def _choose_check_out(self, day: date) -> ClickOutcome:
        if self.classify(day).blocks_check_out:
            return ClickOutcome.IGNORED

        if range_contains_blocked_date(self.check_in, day, self.intervals):
            self.error = DOUBLE_BOOKING_MESSAGE
            logger.info("Double booking refused: %s -> %s", self.check_in, day)
            return ClickOutcome.DOUBLE_BOOKING

        self._transition(PickerState.RANGE_CHOSEN, f"check_out={day}")
        self.check_out = day
        self.error = None
        return ClickOutcome.CHECK_OUT_SET

    def cancel(self):
        """Drop the selection and tell the caller"""
        self._transition(PickerState.IDLE, "cancel")
        self.check_in = None
        self.check_out = None
        self.error = None
        if self.on_cancel is not None:
            self.on_cancel()

    def confirm(self) -> Result[DateRange]:
        """Hand the chosen range to the caller (only once both days are picked)"""
        if self.state is not PickerState.RANGE_CHOSEN:
            return Result.failure(ValidationError("Pick a check-in and a check-out date first"))

        selection = DateRange(self.check_in, self.check_out)
        logger.info("Dates confirmed: %s", selection)
        if self.on_confirm is not None:
            self.on_confirm(selection)
        return Result.success(selection)

    @property
    def selection(self) -> DateRange | None:
        if self.state is PickerState.RANGE_CHOSEN:
            return DateRange(self.check_in, self.check_out)
        return None

    def _transition(self, new_state: PickerState, context: str = ""):
        logger.info("STATE_TRANSITION %s → %s %s", self.state.value, new_state.value, context)
        self.state = new_state
