from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_api_date(value) -> Optional[date]:
    """Parse a date coming from the API.

    The server sends either plain ``YYYY-MM-DD`` strings or full ISO
    timestamps (``2025-01-31T00:00:00.000Z``); only the date part is kept.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        return None


def parse_api_timestamp(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def inclusive_day_count(start: date, end: date) -> int:
    """Calendar days in [start, end]; zero or negative when end precedes start."""
    return (end - start).days + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def month_name(month: int) -> str:
    return calendar.month_name[int(month)]


def parse_month(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` month filter into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month


def weekdays_in_month(year: int, month: int) -> int:
    start, end = month_bounds(year, month)
    count = 0
    day = start
    while day <= end:
        if day.weekday() < 5:
            count += 1
        day += timedelta(days=1)
    return count
