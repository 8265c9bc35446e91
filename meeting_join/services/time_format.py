# meeting_join/services/time_format.py
from __future__ import annotations

import logging
import math
import re
from datetime import date as date_type, datetime, timedelta, timezone
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TIME_ROUNDING_MINUTES = 15
DEFAULT_START_OFFSET_DAYS = 7

_TIME_12H = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)
_TIME_12H_LOOSE = re.compile(r"^(\d{1,2}):?(\d{2})?\s*([ap]m?)", re.IGNORECASE)
_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})$")
_HOUR_ONLY = re.compile(r"^(\d{1,2})$")
_HAS_PERIOD = re.compile(r"[ap]m", re.IGNORECASE)

MeetingTimeFormat = Literal["full", "full-start", "date", "time", "compact"]


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC. Naive values are assumed to be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_zone(tz: Optional[str]) -> ZoneInfo | timezone:
    """
    Look up an IANA zone, falling back to UTC for missing or unknown names.
    """
    if not tz:
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", tz)
        return timezone.utc


def _to_24h(hour: int, period: str) -> int:
    if period == "PM" and hour != 12:
        return hour + 12
    if period == "AM" and hour == 12:
        return 0
    return hour


def format_12h(hour: int, minute: int) -> str:
    """
    Canonical 12-hour representation of a 24-hour clock time: "9:05 PM".
    """
    period = "PM" if hour >= 12 else "AM"
    if hour == 0:
        display_hour = 12
    elif hour > 12:
        display_hour = hour - 12
    else:
        display_hour = hour
    return f"{display_hour}:{minute:02d} {period}"


def format_datetime_12h(value: datetime, tz: Optional[str] = None) -> str:
    """
    Wall-clock time of `value` in `tz` (UTC when omitted), as "h:mm AM".
    """
    local = ensure_utc(value).astimezone(resolve_zone(tz))
    return format_12h(local.hour, local.minute)


def parse_time_12h(text: Optional[str]) -> tuple[int, int] | None:
    """
    Parse "h:mm AM" / "hh:mm pm" into a 24-hour `(hours, minutes)` pair.

    Returns None when the text does not contain a valid 12-hour time.
    """
    if not text:
        return None

    match = _TIME_12H.search(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        return None

    return _to_24h(hour, match.group(3).upper()), minute


def canonicalize_time(text: Optional[str]) -> str:
    """
    Normalize free-form user time input to the canonical "h:mm AM" form.

    Accepted inputs
    ---------------
    - 12-hour with a period: "9:30pm", "09:30 PM", "9 pm", "930am"
    - 24-hour: "21:30", "0:15"
    - bare hour 1-24: "9" -> "9:00 AM", "24" -> "12:00 AM"

    Anything else is returned trimmed but otherwise unchanged so the form
    can flag it.
    """
    cleaned = (text or "").strip()

    if _HAS_PERIOD.search(cleaned):
        match = _TIME_12H_LOOSE.match(cleaned)
        if match:
            hour = int(match.group(1))
            minute = int(match.group(2)) if match.group(2) else 0
            period = "PM" if "p" in match.group(3).lower() else "AM"
            if 1 <= hour <= 12 and 0 <= minute <= 59:
                return format_12h(_to_24h(hour, period), minute)
        return cleaned

    match = _TIME_24H.match(cleaned)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return format_12h(hour, minute)

    match = _HOUR_ONLY.match(cleaned)
    if match:
        hour = int(match.group(1))
        if 1 <= hour <= 24:
            return format_12h(0 if hour == 24 else hour, 0)

    return cleaned


def time_options(step_minutes: int = TIME_ROUNDING_MINUTES) -> list[str]:
    """
    Every selectable time of day, `step_minutes` apart, starting at midnight.
    """
    return [
        format_12h(hour, minute)
        for hour in range(24)
        for minute in range(0, 60, step_minutes)
    ]


def combine_date_time(
    day: date_type,
    time_text: str,
    tz: Optional[str] = None,
) -> datetime | None:
    """
    Combine a calendar date and a user-entered time into an aware UTC instant.

    `time_text` is canonicalized first, so "21:30" and "9:30 PM" are
    equivalent. The wall-clock time is interpreted in `tz` (UTC when
    omitted or unknown). Returns None for unparseable times.
    """
    if day is None or not time_text:
        return None

    parsed = parse_time_12h(canonicalize_time(time_text))
    if parsed is None:
        logger.debug("Invalid time format: %r", time_text)
        return None

    hours, minutes = parsed
    local = datetime(day.year, day.month, day.day, hours, minutes, tzinfo=resolve_zone(tz))
    return local.astimezone(timezone.utc)


def default_start(now: datetime, tz: Optional[str] = None) -> tuple[date_type, str]:
    """
    Suggested start for a new meeting: one week after `now`, rounded up to
    the next 15-minute mark, expressed in `tz`.
    """
    local = ensure_utc(now).astimezone(resolve_zone(tz))
    local = local.replace(second=0, microsecond=0) + timedelta(days=DEFAULT_START_OFFSET_DAYS)

    rounded = math.ceil(local.minute / TIME_ROUNDING_MINUTES) * TIME_ROUNDING_MINUTES
    local = local + timedelta(minutes=rounded - local.minute)

    return local.date(), format_12h(local.hour, local.minute)


def format_meeting_time(
    start: Optional[datetime],
    duration_minutes: Optional[int],
    fmt: MeetingTimeFormat = "full",
    tz: Optional[str] = None,
) -> str:
    """
    Human-readable meeting time.

    Formats
    -------
    - full:       "Monday, August 4, 2025 @ 3:00 PM - 4:00 PM"
    - full-start: "Monday, August 4, 2025 @ 3:00 PM"
    - date:       "Monday, August 4, 2025"
    - time:       "3:00 PM - 4:00 PM"
    - compact:    "Mon, Aug 4 • 3:00 PM - 4:00 PM"

    The end time is omitted when `duration_minutes` is missing or zero.
    """
    if start is None:
        return "Time not set"

    zone = resolve_zone(tz)
    local_start = ensure_utc(start).astimezone(zone)
    local_end = local_start + timedelta(minutes=duration_minutes) if duration_minutes else None

    date_str = f"{local_start:%A}, {local_start:%B} {local_start.day}, {local_start.year}"
    start_str = format_12h(local_start.hour, local_start.minute)
    end_str = format_12h(local_end.hour, local_end.minute) if local_end else None

    if fmt == "compact":
        compact_date = f"{local_start:%a}, {local_start:%b} {local_start.day}"
        if end_str:
            return f"{compact_date} • {start_str} - {end_str}"
        return f"{compact_date} • {start_str}"

    if fmt == "date":
        return date_str

    if fmt == "time":
        return f"{start_str} - {end_str}" if end_str else start_str

    if fmt == "full-start":
        return f"{date_str} @ {start_str}"

    if end_str:
        return f"{date_str} @ {start_str} - {end_str}"
    return f"{date_str} {start_str}"
