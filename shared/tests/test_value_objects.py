from datetime import date, datetime
from decimal import Decimal

import pytest

from shared.domain.result import Result
from shared.domain.value_objects import DateRange, Month, parse_amount, parse_date


def test_date_range_is_half_open():
    stay = DateRange(date(2026, 1, 1), date(2026, 1, 4))

    assert len(stay) == 3
    assert list(stay.days()) == [date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3)]
    assert stay.contains(date(2026, 1, 1))
    assert not stay.contains(date(2026, 1, 4))
    assert stay.strictly_contains(date(2026, 1, 2))
    assert not stay.strictly_contains(date(2026, 1, 1))


def test_date_range_rejects_empty_range():
    with pytest.raises(ValueError):
        DateRange(date(2026, 1, 1), date(2026, 1, 1))


def test_clip_to_month():
    stay = DateRange(date(2025, 12, 15), date(2026, 2, 15))

    assert stay.clip(Month(2026, 1).dates) == DateRange(date(2026, 1, 1), date(2026, 2, 1))
    assert DateRange(date(2026, 3, 1), date(2026, 3, 2)).clip(Month(2026, 1).dates) is None


def test_month_navigation_wraps_years():
    assert Month(2026, 1).previous() == Month(2025, 12)
    assert Month(2025, 12).next() == Month(2026, 1)
    assert len(Month(2024, 2)) == 29
    assert str(Month.parse("2026-03")) == "2026-03"


@pytest.mark.parametrize("raw", ["2026-13", "March", "", "0000-01", "9999-12"])
def test_month_parse_rejects_garbage(raw):
    with pytest.raises(ValueError):
        Month.parse(raw)


def test_parse_date():
    assert parse_date("2026-01-05") == date(2026, 1, 5)
    assert parse_date(date(2026, 1, 5)) == date(2026, 1, 5)
    with pytest.raises(ValueError):
        parse_date(datetime(2026, 1, 5, 12, 0))
    with pytest.raises(ValueError):
        parse_date("05/01/2026")


@pytest.mark.parametrize("raw", ["2026-01-05garbage", "2026-01-01T23:59", "20260105", " 2026-1-5"])
def test_parse_date_rejects_anything_but_a_plain_iso_date(raw):
    with pytest.raises(ValueError):
        parse_date(raw)


def test_last_supported_month_still_has_a_range():
    assert Month(9998, 12).dates == DateRange(date(9998, 12, 1), date(9999, 1, 1))
    with pytest.raises(ValueError):
        Month(9998, 12).next()


def test_parse_amount():
    assert parse_amount(None) == Decimal("0.00")
    assert parse_amount("") == Decimal("0.00")
    assert parse_amount("12.345") == Decimal("12.34")
    assert parse_amount(7) == Decimal("7.00")
    for bad in ("abc", True, float("nan")):
        with pytest.raises(ValueError):
            parse_amount(bad)


def test_result():
    assert Result.success(3).unwrap() == 3
    failed = Result.failure(KeyError("x"))
    assert not failed
    with pytest.raises(KeyError):
        failed.unwrap()
