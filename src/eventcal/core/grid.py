"""Calendar grid layout - pure functions, no I/O.

A month grid is always 6 Monday-first weeks (42 cells) so its height stays
constant whatever the month length or starting weekday.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import date

from .dates import (
    date_key,
    days_in_month,
    first_weekday_offset,
    is_today,
    next_month,
    previous_month,
)
from .events import Event, SpanPosition, span_position
from .query import GroupedEvents, events_in_month, events_on_day, month_event_list

GRID_CELLS = 42
WEEK_DAYS = 7
DEFAULT_VISIBLE_CAP = 3


@dataclass
class PlacedEvent:
    """An event as drawn on one day cell."""

    event: Event
    position: SpanPosition


@dataclass
class DayCell:
    """One day of a month grid."""

    year: int
    month: int
    day: int
    is_adjacent: bool
    is_today: bool
    events: list[PlacedEvent] = field(default_factory=list)
    overflow_count: int = 0

    @property
    def key(self) -> str:
        return date_key(self.year, self.month, self.day)


@dataclass
class MonthSnapshot:
    """The full 42-cell grid of a month view."""

    year: int
    month: int
    cells: list[DayCell]

    def weeks(self) -> list[list[DayCell]]:
        """The cells as 6 rows of 7."""
        return [self.cells[i : i + WEEK_DAYS] for i in range(0, len(self.cells), WEEK_DAYS)]

    @property
    def month_cells(self) -> list[DayCell]:
        return [c for c in self.cells if not c.is_adjacent]


@dataclass
class MiniDay:
    """One cell of the small calendar on a year-view month card."""

    day: int
    is_adjacent: bool
    is_today: bool = False
    first_event: Event | None = None
    has_multi_day: bool = False

    @property
    def has_event(self) -> bool:
        return self.first_event is not None


@dataclass
class MonthSummary:
    """One month card of the year overview."""

    year: int
    month: int
    event_count: int
    days: list[MiniDay]
    events: GroupedEvents


def _grid_identities(year: int, month: int) -> list[tuple[int, int, int, bool]]:
    """(year, month, day, is_adjacent) for all 42 cells of a month grid."""
    offset = first_weekday_offset(year, month)
    count = days_in_month(year, month)
    prev_year, prev_month = previous_month(year, month)
    next_year, following_month = next_month(year, month)
    prev_count = days_in_month(prev_year, prev_month)

    cells = [(prev_year, prev_month, day, True) for day in range(prev_count - offset + 1, prev_count + 1)]
    cells += [(year, month, day, False) for day in range(1, count + 1)]
    cells += [(next_year, following_month, day, True) for day in range(1, GRID_CELLS - len(cells) + 1)]
    return cells


def build_month_snapshot(
    events: Sequence[Event],
    filters: Collection[str],
    year: int,
    month: int,
    visible_cap: int = DEFAULT_VISIBLE_CAP,
    today: date | None = None,
) -> MonthSnapshot:
    """
    Build the 42-cell month grid.

    Padding cells from the neighbouring months are populated too, with the
    year rolled over at December/January.

    Args:
        events: Full event collection
        filters: Active category ids (empty = all)
        year: Target year
        month: Target month, 0-based
        visible_cap: Max events shown per cell; the rest are counted
        today: Override for the wall-clock date

    Returns:
        MonthSnapshot with exactly 42 cells
    """
    if visible_cap < 0:
        raise ValueError(f"visible_cap must be >= 0, got {visible_cap}")

    cells = []
    for cell_year, cell_month, day, adjacent in _grid_identities(year, month):
        matches = events_on_day(events, filters, cell_year, cell_month, day)
        key = date_key(cell_year, cell_month, day)
        cells.append(
            DayCell(
                year=cell_year,
                month=cell_month,
                day=day,
                is_adjacent=adjacent,
                is_today=is_today(cell_year, cell_month, day, today),
                events=[PlacedEvent(e, span_position(e, key)) for e in matches[:visible_cap]],
                overflow_count=max(0, len(matches) - visible_cap),
            )
        )
    return MonthSnapshot(year=year, month=month, cells=cells)


def build_year_overview(
    events: Sequence[Event],
    filters: Collection[str],
    year: int,
    today: date | None = None,
) -> list[MonthSummary]:
    """Twelve month cards: event count, mini calendar and event list."""
    summaries = []
    for month in range(12):
        days = []
        for cell_year, cell_month, day, adjacent in _grid_identities(year, month):
            if adjacent:
                days.append(MiniDay(day=day, is_adjacent=True))
                continue
            matches = events_on_day(events, filters, cell_year, cell_month, day)
            days.append(
                MiniDay(
                    day=day,
                    is_adjacent=False,
                    is_today=is_today(cell_year, cell_month, day, today),
                    first_event=matches[0] if matches else None,
                    has_multi_day=any(e.is_multi_day for e in matches),
                )
            )
        summaries.append(
            MonthSummary(
                year=year,
                month=month,
                event_count=len(events_in_month(events, filters, year, month)),
                days=days,
                events=month_event_list(events, filters, year, month),
            )
        )
    return summaries
