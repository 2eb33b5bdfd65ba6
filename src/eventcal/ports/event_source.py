"""Event source interface."""

from typing import Protocol

from eventcal.core.events import EventDocument


class DocumentLoadError(Exception):
    """Raised when the events document cannot be loaded."""

    pass


class EventSource(Protocol):
    """Interface for loading the events document from any backend."""

    def load(self) -> EventDocument:
        """Load and parse the whole document. Raises DocumentLoadError."""
        ...
