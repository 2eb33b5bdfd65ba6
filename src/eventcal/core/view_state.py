"""View state - which month is open and which categories are filtered.

ViewState is an immutable value owned by the presentation layer and passed
into every query; the core keeps no state of its own.
"""

import re
from collections.abc import Collection
from dataclasses import dataclass, field, replace
from urllib.parse import parse_qs, urlencode

_LEADING_INT = re.compile(r"\s*[-+]?\d+")


@dataclass(frozen=True)
class ViewState:
    """Active category filters plus the open month (None = year view)."""

    filters: frozenset[str] = field(default_factory=frozenset)
    month: int | None = None

    @property
    def is_year_view(self) -> bool:
        return self.month is None

    def toggle_filter(self, category_id: str) -> "ViewState":
        """Add the category to the filter set, or remove it if present."""
        return replace(self, filters=self.filters ^ {category_id})

    def clear_filters(self) -> "ViewState":
        return replace(self, filters=frozenset())

    def show_month(self, month: int) -> "ViewState":
        if not 0 <= month <= 11:
            raise ValueError(f"Month must be 0-11, got {month}")
        return replace(self, month=month)

    def show_year(self) -> "ViewState":
        return replace(self, month=None)

    def navigate(self, direction: int) -> "ViewState":
        """Step the open month, wrapping within the year. No-op in year view."""
        if self.month is None:
            return self
        return replace(self, month=(self.month + direction) % 12)

    def to_query(self) -> str:
        """Encode as a URL query string; empty for the default view."""
        params = {}
        if self.filters:
            params["categories"] = ",".join(sorted(self.filters))
        if self.month is not None:
            params["month"] = str(self.month)
        return urlencode(params, safe=",")

    @classmethod
    def from_query(cls, query: str, known_categories: Collection[str]) -> "ViewState":
        """
        Decode a URL query string.

        Unknown category ids and out-of-range months are dropped silently.
        The static-host redirect form (?p=<path>&q=<query>) is unwrapped
        and its ``q`` value parsed instead.
        """
        params = parse_qs(query.lstrip("?"))
        if "p" in params or "q" in params:
            params = parse_qs(params.get("q", [""])[0])

        filters = frozenset()
        categories = params.get("categories", [""])[0]
        if categories:
            filters = frozenset(c for c in categories.split(",") if c in known_categories)

        month = None
        # Leading integer only, so "3.5" and "3abc" both open month 3
        match = _LEADING_INT.match(params.get("month", [""])[0])
        if match and 0 <= int(match.group()) <= 11:
            month = int(match.group())

        return cls(filters=filters, month=month)
