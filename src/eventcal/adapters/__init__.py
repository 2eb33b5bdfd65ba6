"""Adapters - I/O implementations of ports."""

from .file_source import FileEventSource
from .http_source import HttpEventSource


def source_for(location: str, timeout: int = 10):
    """Pick the adapter for a file path or an http(s) URL."""
    if location.startswith(("http://", "https://")):
        return HttpEventSource(location, timeout=timeout)
    return FileEventSource(location)


__all__ = [
    "FileEventSource",
    "HttpEventSource",
    "source_for",
]
