# meeting_join/services/weekday_math.py
from __future__ import annotations

import calendar
from datetime import date as date_type

DAYS_IN_WEEK = 7

SUNDAY = 1
MONDAY = 2
TUESDAY = 3
WEDNESDAY = 4
THURSDAY = 5
FRIDAY = 6
SATURDAY = 7

WEEKDAY_NAMES = {
    SUNDAY: "Sunday",
    MONDAY: "Monday",
    TUESDAY: "Tuesday",
    WEDNESDAY: "Wednesday",
    THURSDAY: "Thursday",
    FRIDAY: "Friday",
    SATURDAY: "Saturday",
}

WORKWEEK_DAYS = frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})


def weekday_of(day: date_type) -> int:
    """
    Return the provider weekday code of `day` (1=Sunday ... 7=Saturday).

    `datetime` values are accepted; their own calendar date is used.
    """
    return day.isoweekday() % DAYS_IN_WEEK + 1


def nth_weekday_position(day: date_type) -> int:
    """
    Count how many times the weekday of `day` has occurred in its month,
    up to and including `day`.

    Returns 1-4 for most dates. The 29th-31st can be a 5th occurrence, in
    which case 5 is returned and `is_last_weekday_of_month(day)` is True.
    """
    return (day.day - 1) // DAYS_IN_WEEK + 1


def is_last_weekday_of_month(day: date_type) -> bool:
    """
    True when no later date in the same month falls on the same weekday.

    Computed from the month length, so it holds up to `date.max`.
    """
    days_in_month = calendar.monthrange(day.year, day.month)[1]
    return day.day + DAYS_IN_WEEK > days_in_month


def week_of_month(day: date_type) -> tuple[int, bool]:
    """
    Return `(position, is_last)` for `day` in a single call.
    """
    return nth_weekday_position(day), is_last_weekday_of_month(day)


def weekday_name(code: int) -> str:
    """
    Full English name for a weekday code; empty string for unknown codes.
    """
    return WEEKDAY_NAMES.get(code, "")
