"""Event queries over the loaded collection - pure functions, no I/O.

Every query takes the full event list and the active category filter set
explicitly. An empty filter set means "show everything".
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field

from .dates import date_key, month_key
from .events import Event, has_valid_date


@dataclass
class GroupedEvents:
    """Confirmed events followed by date-uncertain ones."""

    confirmed: list[Event] = field(default_factory=list)
    uncertain: list[Event] = field(default_factory=list)

    @property
    def show_separator(self) -> bool:
        """A divider between the groups only makes sense if both have rows."""
        return bool(self.confirmed) and bool(self.uncertain)

    @property
    def all(self) -> list[Event]:
        return self.confirmed + self.uncertain

    def __len__(self) -> int:
        return len(self.confirmed) + len(self.uncertain)

    def __bool__(self) -> bool:
        return len(self) > 0


def matches_filter(event: Event, filters: Collection[str]) -> bool:
    """Check an event against the active category filter set."""
    return not filters or event.category in filters


def sort_by_start(events: Iterable[Event]) -> list[Event]:
    """Sort dated events by start date; ties keep input order."""
    return sorted(events, key=lambda e: e.start_date)


def sort_dated_first(events: Iterable[Event]) -> list[Event]:
    """
    Dated events by start date, then undated events by title.

    Pure function - no I/O.
    """

    def sort_key(e: Event) -> tuple[int, str]:
        if has_valid_date(e):
            return (0, e.start_date)
        return (1, e.title)

    return sorted(events, key=sort_key)


def events_on_day(
    events: Iterable[Event],
    filters: Collection[str],
    year: int,
    month: int,
    day: int,
    include_uncertain: bool = False,
) -> list[Event]:
    """
    Events whose date range covers the given day, ordered by start date.

    Uncertain-dated events are left out unless ``include_uncertain`` is set;
    the calendar grids list them separately.
    """
    key = date_key(year, month, day)
    return sort_by_start(
        e
        for e in events
        if (include_uncertain or not e.date_uncertain)
        and matches_filter(e, filters)
        and e.date_range is not None
        and e.date_range.contains(key)
    )


def events_in_month(
    events: Iterable[Event],
    filters: Collection[str],
    year: int,
    month: int,
    include_uncertain: bool = False,
) -> list[Event]:
    """
    Events whose date range touches the given month, in input order.

    A multi-month event appears in every month it spans.
    """
    prefix = month_key(year, month)
    return [
        e
        for e in events
        if (include_uncertain or not e.date_uncertain)
        and matches_filter(e, filters)
        and e.date_range is not None
        and e.date_range.touches_month(prefix)
    ]


def month_event_list(
    events: Iterable[Event],
    filters: Collection[str],
    year: int,
    month: int,
) -> GroupedEvents:
    """Events touching a month, confirmed first, each group by start date."""
    in_month = events_in_month(events, filters, year, month, include_uncertain=True)
    return GroupedEvents(
        confirmed=sort_by_start(e for e in in_month if not e.date_uncertain),
        uncertain=sort_by_start(e for e in in_month if e.date_uncertain),
    )


def undated_and_uncertain_events(
    events: Iterable[Event],
    filters: Collection[str],
) -> list[Event]:
    """
    All date-uncertain events, with or without a usable date.

    Dated ones come first by start date, then undated ones by title.
    """
    return sort_dated_first(
        e for e in events if e.date_uncertain and matches_filter(e, filters)
    )


def events_table(
    events: Iterable[Event],
    filters: Collection[str],
) -> GroupedEvents:
    """Every filtered event for the flat table, split by date certainty."""
    filtered = [e for e in events if matches_filter(e, filters)]
    return GroupedEvents(
        confirmed=sort_dated_first(e for e in filtered if not e.date_uncertain),
        uncertain=sort_dated_first(e for e in filtered if e.date_uncertain),
    )


def find_event(events: Iterable[Event], event_id: str) -> Event | None:
    """Look up an event by id. Unknown ids give None."""
    return next((e for e in events if e.id == event_id), None)
