"""Calendar-date helpers.

Everything here works on ``datetime.date`` values (year/month/day, no time
component), so day boundaries never depend on the process timezone once
"today" has been resolved.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

# Index matches date.weekday(): Monday=0 ... Sunday=6
WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def get_today(timezone: str | None = None) -> date:
    """Return today's calendar date.

    Args:
        timezone: IANA timezone name; None uses the local calendar day

    Returns:
        The current date in the requested timezone
    """
    if timezone:
        return datetime.now(ZoneInfo(timezone)).date()
    return date.today()


def parse_date(value: str | date) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string (dates pass through unchanged).

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def weekday_name(value: date) -> str:
    """Return the lowercase English weekday name of a date."""
    return WEEKDAY_NAMES[value.weekday()]


def normalize_weekday(value: str) -> str:
    """Normalize "Mon", "monday", "MONDAY" to "monday".

    Raises:
        ValueError: If the value is not a weekday name or abbreviation
    """
    key = value.strip().lower()
    if key in WEEKDAY_NAMES:
        return key
    if len(key) >= 2:
        for name in WEEKDAY_NAMES:
            if name.startswith(key):
                return name
    raise ValueError(f"Unknown weekday: {value!r}")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month.

    2024-01-31 + 1 month -> 2024-02-29, 2023-01-31 + 1 month -> 2023-02-28.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, days_in_month(year, month))
    return date(year, month, day)


def month_days(year: int, month: int) -> list[date]:
    """Return every date of the given month, in order."""
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]
