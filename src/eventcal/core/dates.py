"""Pure calendar arithmetic - no I/O dependencies.

Months are 0-based throughout (January = 0) to match the month indices used
in view state and query strings. Weeks start on Monday.
"""

import calendar
from datetime import date


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Fold an out-of-range 0-based month into the adjacent year(s).

    normalize_month(2026, -1) == (2025, 11)
    normalize_month(2026, 12) == (2027, 0)
    """
    years, month = divmod(month, 12)
    return year + years, month


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return normalize_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return normalize_month(year, month + 1)


def first_weekday_offset(year: int, month: int) -> int:
    """Weekday of the 1st of the month, Monday=0 ... Sunday=6."""
    year, month = normalize_month(year, month)
    # isoweekday() is Monday=1..Sunday=7, so Sunday-origin is isoweekday % 7
    sunday_origin = date(year, month + 1, 1).isoweekday() % 7
    return (sunday_origin + 6) % 7


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    year, month = normalize_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def is_today(year: int, month: int, day: int, today: date | None = None) -> bool:
    """Check whether the given date is today.

    The wall clock is read on every call unless ``today`` is supplied.
    """
    today = today or date.today()
    return today.year == year and today.month - 1 == month and today.day == day


def date_key(year: int, month: int, day: int) -> str:
    """Canonical YYYY-MM-DD key used for all interval comparisons."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def month_key(year: int, month: int) -> str:
    """YYYY-MM prefix of every date key in the month."""
    return f"{year:04d}-{month + 1:02d}"


def parse_date_key(key: str) -> tuple[int, int, int]:
    """Split a YYYY-MM-DD key into (year, 0-based month, day)."""
    year, month, day = (int(part) for part in key.split("-"))
    return year, month - 1, day

