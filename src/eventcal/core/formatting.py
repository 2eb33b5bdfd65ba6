"""Date range display text."""

import calendar

from .dates import parse_date_key
from .events import Event

MONTH_NAMES = list(calendar.month_name)[1:]
MONTH_ABBR = list(calendar.month_abbr)[1:]
NO_DATE_TEXT = "Date TBD"
UNCERTAIN_PREFIX = "≈ "


def format_date(key: str) -> str:
    """'2026-03-15' -> '15 March 2026'."""
    year, month, day = parse_date_key(key)
    return f"{day} {MONTH_NAMES[month]} {year}"


def format_date_range(start: str, end: str, uncertain: bool = False) -> str:
    """
    Long date range, as shown in the month event list and detail view.

    15 March 2026 / 15–17 March 2026 / 30 January 2026 – 2 February 2026
    """
    if not start.strip() or not end.strip():
        return NO_DATE_TEXT

    prefix = UNCERTAIN_PREFIX if uncertain else ""
    if start == end:
        return prefix + format_date(start)

    start_year, start_month, start_day = parse_date_key(start)
    end_year, end_month, end_day = parse_date_key(end)
    if (start_year, start_month) == (end_year, end_month):
        return f"{prefix}{start_day}–{end_day} {MONTH_NAMES[start_month]} {start_year}"
    return f"{prefix}{format_date(start)} – {format_date(end)}"


def format_short_range(start: str, end: str, uncertain: bool = False) -> str:
    """Year-less range for the flat events table: 15 March / 30 Jan – 2 Feb."""
    if not start.strip() or not end.strip():
        return NO_DATE_TEXT

    prefix = UNCERTAIN_PREFIX if uncertain else ""
    start_year, start_month, start_day = parse_date_key(start)
    end_year, end_month, end_day = parse_date_key(end)
    if start == end:
        return f"{prefix}{start_day} {MONTH_NAMES[start_month]}"
    if (start_year, start_month) == (end_year, end_month):
        return f"{prefix}{start_day}–{end_day} {MONTH_NAMES[start_month]}"
    return f"{prefix}{start_day} {MONTH_ABBR[start_month]} – {end_day} {MONTH_ABBR[end_month]}"


def format_list_date(event: Event) -> str:
    """Compact day label for month card lists: 5, 5–7 or 30.01–2.02."""
    if event.date_range is None:
        return NO_DATE_TEXT

    _, start_month, start_day = parse_date_key(event.start_date)
    _, end_month, end_day = parse_date_key(event.end_date)
    if event.date_range.is_single_day:
        label = str(start_day)
    elif start_month == end_month:
        label = f"{start_day}–{end_day}"
    else:
        label = f"{start_day}.{start_month + 1:02d}–{end_day}.{end_month + 1:02d}"

    if event.date_uncertain:
        label = UNCERTAIN_PREFIX.strip() + label
    return label
