from datetime import date

import pytest

from shared.domain.value_objects import DateRange, Month

from apps.reservations.domain.calendar import (
    DOUBLE_BOOKING_MESSAGE,
    AvailabilityCalendar,
    ClickOutcome,
    PickerState,
)
from apps.reservations.domain.classifier import DayStatus
from apps.reservations.domain.entities import IntervalDraft
from apps.reservations.domain.errors import ValidationError


def stay(check_in, check_out, name="Guest"):
    return IntervalDraft(check_in=check_in, check_out=check_out, guest_name=name).build()


@pytest.fixture
def booked():
    return stay("2026-01-14", "2026-01-17")


@pytest.fixture
def calendar(booked):
    return AvailabilityCalendar([booked], today=date(2026, 1, 1))


def test_double_booking_keeps_chosen_check_in(calendar):
    assert calendar.click(date(2026, 1, 10)) is ClickOutcome.CHECK_IN_SET
    assert calendar.state is PickerState.CHECK_IN_CHOSEN

    assert calendar.click(date(2026, 1, 3)) is ClickOutcome.CHECK_IN_SET
    assert calendar.check_in == date(2026, 1, 3)
    assert calendar.state is PickerState.CHECK_IN_CHOSEN

    assert calendar.click(date(2026, 1, 20)) is ClickOutcome.DOUBLE_BOOKING
    assert calendar.error == DOUBLE_BOOKING_MESSAGE
    assert calendar.state is PickerState.CHECK_IN_CHOSEN
    assert calendar.check_in == date(2026, 1, 3)
    assert calendar.check_out is None


def test_range_up_to_next_check_in_is_accepted(calendar):
    calendar.click(date(2026, 1, 10))

    assert calendar.click(date(2026, 1, 14)) is ClickOutcome.CHECK_OUT_SET
    assert calendar.state is PickerState.RANGE_CHOSEN
    assert calendar.selection == DateRange(date(2026, 1, 10), date(2026, 1, 14))


def test_accepted_click_clears_previous_error(calendar):
    calendar.click(date(2026, 1, 3))
    calendar.click(date(2026, 1, 20))

    calendar.click(date(2026, 1, 12))

    assert calendar.error is None
    assert calendar.state is PickerState.RANGE_CHOSEN


def test_past_days_are_ignored(calendar):
    calendar.today = date(2026, 1, 5)

    assert calendar.click(date(2026, 1, 4)) is ClickOutcome.IGNORED
    assert calendar.state is PickerState.IDLE


@pytest.mark.parametrize("day", [date(2026, 1, 14), date(2026, 1, 15)])
def test_booked_days_are_not_selectable_starts(calendar, day):
    assert calendar.click(day) is ClickOutcome.IGNORED
    assert calendar.state is PickerState.IDLE


def test_checkout_day_is_a_selectable_start(calendar):
    assert calendar.click(date(2026, 1, 17)) is ClickOutcome.CHECK_IN_SET


def test_end_on_existing_checkout_is_ignored():
    calendar = AvailabilityCalendar([stay("2026-01-10", "2026-01-12")], today=date(2026, 1, 1))
    calendar.click(date(2026, 1, 5))

    assert calendar.click(date(2026, 1, 12)) is ClickOutcome.IGNORED
    assert calendar.state is PickerState.CHECK_IN_CHOSEN
    assert calendar.error is None


def test_click_after_range_starts_over(calendar):
    calendar.click(date(2026, 1, 3))
    calendar.click(date(2026, 1, 6))

    assert calendar.click(date(2026, 1, 8)) is ClickOutcome.CHECK_IN_SET
    assert calendar.state is PickerState.CHECK_IN_CHOSEN
    assert calendar.check_in == date(2026, 1, 8)
    assert calendar.check_out is None


def test_confirm_hands_range_to_caller(booked):
    confirmed = []
    calendar = AvailabilityCalendar([booked], today=date(2026, 1, 1), on_confirm=confirmed.append)
    calendar.click(date(2026, 1, 3))
    calendar.click(date(2026, 1, 6))

    result = calendar.confirm()

    assert result.ok
    assert confirmed == [DateRange(date(2026, 1, 3), date(2026, 1, 6))]


def test_confirm_requires_a_full_range(calendar):
    calendar.click(date(2026, 1, 3))

    result = calendar.confirm()

    assert isinstance(result.error, ValidationError)


def test_cancel_resets_and_notifies(booked):
    cancelled = []
    calendar = AvailabilityCalendar([booked], today=date(2026, 1, 1), on_cancel=lambda: cancelled.append(True))
    calendar.click(date(2026, 1, 3))

    calendar.cancel()

    assert calendar.state is PickerState.IDLE
    assert calendar.check_in is None
    assert cancelled == [True]


def test_month_navigation_keeps_selection(calendar):
    calendar.click(date(2026, 1, 3))

    assert calendar.next_month() == Month(2026, 2)
    assert calendar.prev_month() == Month(2026, 1)
    assert calendar.prev_month() == Month(2025, 12)
    assert calendar.check_in == date(2026, 1, 3)
    assert calendar.state is PickerState.CHECK_IN_CHOSEN


def test_editing_interval_days_stay_selectable(booked):
    calendar = AvailabilityCalendar([booked], today=date(2026, 1, 1), editing_id=booked.id)

    assert calendar.click(date(2026, 1, 15)) is ClickOutcome.CHECK_IN_SET
    assert calendar.click(date(2026, 1, 18)) is ClickOutcome.CHECK_OUT_SET


def test_month_days_describe_the_grid(calendar):
    calendar.click(date(2026, 1, 3))
    calendar.click(date(2026, 1, 6))

    days = calendar.month_days()

    assert len(days) == 31
    by_day = {d.day: d for d in days}
    assert by_day[date(2026, 1, 1)].is_today
    assert by_day[date(2026, 1, 15)].classification.status is DayStatus.FULLY_BOOKED
    assert not by_day[date(2026, 1, 15)].selectable_as_start
    assert by_day[date(2026, 1, 4)].in_selected_range
    assert by_day[date(2026, 1, 6)].is_check_out
    assert by_day[date(2026, 1, 6)].to_dict()["status"] == "vacant"
