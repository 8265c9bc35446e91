# tests/test_weekday_math.py
from datetime import date, datetime

import pytest

from meeting_join.services.weekday_math import (
    FRIDAY,
    SATURDAY,
    SUNDAY,
    TUESDAY,
    is_last_weekday_of_month,
    nth_weekday_position,
    week_of_month,
    weekday_name,
    weekday_of,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 1, 4), SUNDAY),
        (date(2026, 1, 13), TUESDAY),
        (date(2026, 1, 30), FRIDAY),
        (date(2026, 1, 31), SATURDAY),
    ],
)
def test_weekday_of_uses_sunday_first_codes(day, expected):
    assert weekday_of(day) == expected


def test_weekday_of_accepts_datetime():
    assert weekday_of(datetime(2026, 1, 13, 23, 59)) == TUESDAY


@pytest.mark.parametrize(
    "day, position",
    [
        (date(2026, 1, 1), 1),
        (date(2026, 1, 7), 1),
        (date(2026, 1, 8), 2),
        (date(2026, 1, 13), 2),
        (date(2026, 1, 27), 4),
        (date(2026, 1, 30), 5),
    ],
)
def test_nth_weekday_position(day, position):
    assert nth_weekday_position(day) == position


def test_last_weekday_detection():
    # Jan 27 2026 is both the 4th and the last Tuesday.
    assert is_last_weekday_of_month(date(2026, 1, 27))
    assert not is_last_weekday_of_month(date(2026, 1, 20))
    # February 2026 has exactly four of every weekday.
    assert is_last_weekday_of_month(date(2026, 2, 22))
    assert not is_last_weekday_of_month(date(2026, 2, 14))


def test_week_of_month_returns_both_values():
    assert week_of_month(date(2026, 1, 30)) == (5, True)
    assert week_of_month(date(2026, 1, 13)) == (2, False)


def test_weekday_name_unknown_code_is_empty():
    assert weekday_name(TUESDAY) == "Tuesday"
    assert weekday_name(0) == ""
    assert weekday_name(8) == ""


def test_last_weekday_at_end_of_supported_range():
    assert is_last_weekday_of_month(date(9999, 12, 31))
    assert is_last_weekday_of_month(date(9999, 12, 25))
    assert not is_last_weekday_of_month(date(9999, 12, 24))
    assert week_of_month(date(9999, 12, 31)) == (5, True)
