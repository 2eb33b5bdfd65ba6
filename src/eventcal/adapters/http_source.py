"""HTTP adapter - fetches the events document with a single GET."""

import logging

import requests

from eventcal.core.events import EventDocument
from eventcal.ports.event_source import DocumentLoadError

from .file_source import parse_document

logger = logging.getLogger(__name__)


class HttpEventSource:
    """
    Fetches the events document from a URL.

    Implements EventSource protocol. No retries: a failed fetch is reported
    once and the caller shows the load-failure state.
    """

    def __init__(self, url: str, timeout: int = 10, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def load(self) -> EventDocument:
        try:
            resp = self._session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch {self.url}: {e}")
            raise DocumentLoadError(f"Failed to fetch {self.url}") from e
        except ValueError as e:
            logger.warning(f"Response from {self.url} is not JSON: {e}")
            raise DocumentLoadError(f"Invalid JSON from {self.url}") from e

        return parse_document(data, self.url)
