"""Pure event domain logic - no I/O dependencies."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

FALLBACK_CATEGORY_COLOR = "#6b7280"


class SpanPosition(Enum):
    """Role of an event on one day of its date range."""

    SINGLE = "single"
    START = "start"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class DateRange:
    """An inclusive range of YYYY-MM-DD keys."""

    start: str
    end: str

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def contains(self, key: str) -> bool:
        """Check if a date key falls within this range."""
        return self.start <= key <= self.end

    def touches_month(self, month_prefix: str) -> bool:
        """Check if any day of the YYYY-MM month falls within this range."""
        return self.start[:7] <= month_prefix <= self.end[:7]


def make_date_range(start: str | None, end: str | None) -> DateRange | None:
    """
    Build a DateRange from raw date strings.

    Absent and blank-after-trim are the same thing: if either side is
    missing, the event has no usable range at all.
    """
    start = (start or "").strip()
    end = (end or "").strip()
    if not start or not end:
        return None
    return DateRange(start=start, end=end)


@dataclass(frozen=True)
class Category:
    """A named, colored grouping of events."""

    id: str
    name: str
    color: str = FALLBACK_CATEGORY_COLOR

    @classmethod
    def fallback(cls, category_id: str) -> "Category":
        """Stand-in for a category id that is not in the document."""
        return cls(id=category_id, name=category_id, color=FALLBACK_CATEGORY_COLOR)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Category":
        """Create Category from a document record."""
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            color=data.get("color") or FALLBACK_CATEGORY_COLOR,
        )


@dataclass(frozen=True)
class Event:
    """A calendar event, immutable once loaded."""

    id: str
    title: str
    category: str
    date_range: DateRange | None = None
    date_uncertain: bool = False
    color: str = ""
    location: str = ""
    description: str = ""
    url: str = ""

    @property
    def start_date(self) -> str:
        return self.date_range.start if self.date_range else ""

    @property
    def end_date(self) -> str:
        return self.date_range.end if self.date_range else ""

    @property
    def is_multi_day(self) -> bool:
        return self.date_range is not None and not self.date_range.is_single_day

    @property
    def has_link(self) -> bool:
        return bool(self.url.strip())

    def display_color(self, category: Category) -> str:
        """Event color override, else the category swatch."""
        return self.color or category.color

    @classmethod
    def from_dict(cls, data: Mapping) -> "Event":
        """Create Event from a camelCase document record."""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            category=data.get("category") or "",
            date_range=make_date_range(data.get("startDate"), data.get("endDate")),
            date_uncertain=bool(data.get("dateUncertain", False)),
            color=data.get("color") or "",
            location=data.get("location") or "",
            description=data.get("description") or "",
            url=data.get("url") or "",
        )

    def to_dict(self) -> dict:
        """Serialize back to the document's camelCase shape."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "dateUncertain": self.date_uncertain,
            "color": self.color,
            "location": self.location,
            "description": self.description,
            "url": self.url,
        }


class CategoryIndex:
    """Category lookup by id that never fails."""

    def __init__(self, categories: list[Category]):
        self._categories = list(categories)
        self._by_id = {c.id: c for c in self._categories}

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self):
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def get(self, category_id: str) -> Category:
        """Return the category, or a gray fallback named after the id."""
        return self._by_id.get(category_id) or Category.fallback(category_id)


@dataclass(frozen=True)
class EventDocument:
    """The loaded events document."""

    events: list[Event] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)

    @property
    def categories_index(self) -> CategoryIndex:
        return CategoryIndex(self.categories)

    @classmethod
    def from_dict(cls, data: Mapping) -> "EventDocument":
        """Create EventDocument from the parsed JSON document."""
        return cls(
            events=[Event.from_dict(e) for e in data.get("events") or []],
            categories=[Category.from_dict(c) for c in data.get("categories") or []],
        )


def has_valid_date(event: Event | Mapping) -> bool:
    """
    True iff both start and end dates are present and non-blank.

    Accepts a loaded Event or a raw camelCase document record.
    """
    if isinstance(event, Event):
        return event.date_range is not None
    return make_date_range(event.get("startDate"), event.get("endDate")) is not None


def span_position(event: Event, key: str) -> SpanPosition:
    """
    Position of an event on the given day within its date range.

    Only meaningful for keys inside the event's range.
    """
    date_range = event.date_range
    if date_range is None:
        raise ValueError(f"Event {event.id!r} has no date range")
    if date_range.is_single_day:
        return SpanPosition.SINGLE
    if key == date_range.start:
        return SpanPosition.START
    if key == date_range.end:
        return SpanPosition.END
    return SpanPosition.MIDDLE
