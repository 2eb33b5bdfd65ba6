"""Ports - interfaces/protocols for external dependencies."""

from .event_source import DocumentLoadError, EventSource

__all__ = [
    "DocumentLoadError",
    "EventSource",
]
