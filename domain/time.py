"""
Domain time utilities (pure).

Sale timestamps are local wall-clock times: timezone-naive datetimes read as
the shop's local time. Aware values are converted once at the edges
(repositories, HTTP clients, API query parameters) and never inside the
aggregation logic.

Month arithmetic is clamped: shifting Jan 31 back or forward lands on the last
valid day of the target month (e.g. Mar 31 minus one month is Feb 29 in a leap
year), never on a rolled-over date in the following month.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone, tzinfo
from typing import Optional

WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def require_wall_clock_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that a timestamp is a local wall-clock time.

    Invariants:
    - Timestamps must be datetime instances.
    - Timestamps must be timezone-naive.
    """

    if not isinstance(value, datetime):
        raise ValueError(f"{name} must be a datetime")
    if value.tzinfo is not None and value.utcoffset() is not None:
        raise ValueError(f"{name} must be a timezone-naive wall-clock timestamp")


def to_wall_clock(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert a datetime to a naive local wall-clock datetime.

    Naive values are returned unchanged. Aware values are converted to `tz`
    (or the system local zone when `tz` is None) and stripped of tzinfo.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=None)
    return value.astimezone(tz).replace(tzinfo=None)


def wall_clock_to_utc(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Interpret a wall-clock datetime in `tz` (system local zone when None) and
    return the equivalent timezone-aware UTC datetime.
    """

    require_wall_clock_timestamp("value", value)
    if tz is None:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=tz).astimezone(timezone.utc)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _shift_year_month(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def add_months(value: datetime, months: int) -> datetime:
    """Shift `value` by a number of calendar months, clamping the day of month."""

    year, month = _shift_year_month(value.year, value.month, months)
    day = min(value.day, days_in_month(year, month))
    return value.replace(year=year, month=month, day=day)


def month_start(value: datetime, months_back: int = 0) -> datetime:
    """Midnight on the first day of the month `months_back` months before `value`."""

    year, month = _shift_year_month(value.year, value.month, -months_back)
    return datetime(year, month, 1)


def last_day_of_month(value: datetime) -> datetime:
    """Midnight at the start of the last day of `value`'s month."""

    return datetime(value.year, value.month, days_in_month(value.year, value.month))


def weekday_abbreviation(value: datetime) -> str:
    # datetime.weekday() is Monday=0; the labels are Sunday-first.
    return WEEKDAY_ABBREVIATIONS[(value.weekday() + 1) % 7]


def month_abbreviation(value: datetime) -> str:
    return MONTH_ABBREVIATIONS[value.month - 1]


def parse_timestamp(value: object, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse a stored or transmitted timestamp into a wall-clock datetime.

    Accepts datetimes and ISO-8601 strings, including a trailing 'Z'.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")
    return to_wall_clock(dt, tz)


__all__ = [
    "WEEKDAY_ABBREVIATIONS",
    "MONTH_ABBREVIATIONS",
    "require_wall_clock_timestamp",
    "to_wall_clock",
    "wall_clock_to_utc",
    "start_of_day",
    "days_in_month",
    "add_months",
    "month_start",
    "last_day_of_month",
    "weekday_abbreviation",
    "month_abbreviation",
    "parse_timestamp",
]
