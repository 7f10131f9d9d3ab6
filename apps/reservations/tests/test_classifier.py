from datetime import date, timedelta

import pytest

from apps.reservations.domain.classifier import DayStatus, classify_day, classify_days
from apps.reservations.domain.entities import IntervalDraft, IntervalKind


@pytest.fixture
def a():
    return IntervalDraft(check_in="2026-01-01", check_out="2026-01-05", guest_name="A").build()


@pytest.fixture
def b():
    return IntervalDraft(check_in="2026-01-05", check_out="2026-01-08", guest_name="B").build()


def test_checkout_day_without_following_stay(a):
    result = classify_day(date(2026, 1, 5), [a])

    assert result.status is DayStatus.CHECK_OUT
    assert result.checking_out == a


def test_checkout_day_becomes_turnaround(a, b):
    result = classify_day(date(2026, 1, 5), [a, b])

    assert result.status is DayStatus.TURNAROUND
    assert result.checking_out == a
    assert result.checking_in == b
    assert result.kind is None


def test_interior_day_is_fully_booked(a):
    result = classify_day(date(2026, 1, 3), [a])

    assert result.status is DayStatus.FULLY_BOOKED
    assert result.kind is IntervalKind.GUEST
    assert result.intervals == (a,)


def test_fully_booked_maintenance_carries_kind():
    block = IntervalDraft(check_in="2026-02-01", check_out="2026-02-04", kind="maintenance").build()

    result = classify_day(date(2026, 2, 2), [block])

    assert result.kind is IntervalKind.MAINTENANCE


def test_check_in_and_vacant_days(a):
    assert classify_day(date(2026, 1, 1), [a]).status is DayStatus.CHECK_IN
    assert classify_day(date(2025, 12, 31), [a]).status is DayStatus.VACANT
    assert classify_day(date(2026, 1, 6), []).status is DayStatus.VACANT


def test_every_day_gets_exactly_one_status(a, b):
    days = [date(2025, 12, 30) + timedelta(days=n) for n in range(12)]

    results = classify_days(days, [a, b])

    assert [r.day for r in results] == days
    assert [r.status for r in results] == [
        DayStatus.VACANT,
        DayStatus.VACANT,
        DayStatus.CHECK_IN,
        DayStatus.FULLY_BOOKED,
        DayStatus.FULLY_BOOKED,
        DayStatus.FULLY_BOOKED,
        DayStatus.TURNAROUND,
        DayStatus.FULLY_BOOKED,
        DayStatus.FULLY_BOOKED,
        DayStatus.CHECK_OUT,
        DayStatus.VACANT,
        DayStatus.VACANT,
    ]


def test_blocking_flags(a, b):
    turnaround = classify_day(date(2026, 1, 5), [a, b])
    check_out = classify_day(date(2026, 1, 8), [a, b])
    check_in = classify_day(date(2026, 1, 1), [a, b])

    assert turnaround.blocks_check_in and turnaround.blocks_check_out
    assert check_out.blocks_check_out and not check_out.blocks_check_in
    assert check_in.blocks_check_in and not check_in.blocks_check_out
