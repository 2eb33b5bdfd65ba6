"""Functional core - pure calendar logic with no I/O."""

from .dates import date_key, days_in_month, first_weekday_offset, is_today
from .events import (
    Category,
    CategoryIndex,
    DateRange,
    Event,
    EventDocument,
    SpanPosition,
    has_valid_date,
    span_position,
)
from .query import (
    GroupedEvents,
    events_in_month,
    events_on_day,
    events_table,
    find_event,
    month_event_list,
    undated_and_uncertain_events,
)
from .grid import DayCell, MonthSnapshot, MonthSummary, build_month_snapshot, build_year_overview
from .view_state import ViewState

__all__ = [
    # Dates
    "date_key",
    "days_in_month",
    "first_weekday_offset",
    "is_today",
    # Events
    "Category",
    "CategoryIndex",
    "DateRange",
    "Event",
    "EventDocument",
    "SpanPosition",
    "has_valid_date",
    "span_position",
    # Queries
    "GroupedEvents",
    "events_in_month",
    "events_on_day",
    "events_table",
    "find_event",
    "month_event_list",
    "undated_and_uncertain_events",
    # Grid
    "DayCell",
    "MonthSnapshot",
    "MonthSummary",
    "build_month_snapshot",
    "build_year_overview",
    # View state
    "ViewState",
]
