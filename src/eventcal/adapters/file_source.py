"""Local JSON file adapter for the events document."""

import json
import logging
from pathlib import Path

from eventcal.core.events import EventDocument
from eventcal.ports.event_source import DocumentLoadError

logger = logging.getLogger(__name__)


def parse_document(data: object, origin: str) -> EventDocument:
    """Build an EventDocument from decoded JSON, or raise DocumentLoadError."""
    if not isinstance(data, dict):
        raise DocumentLoadError(f"{origin}: expected a JSON object at the top level")
    try:
        document = EventDocument.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Malformed record in {origin}: {e!r}")
        raise DocumentLoadError(f"{origin}: malformed event or category record") from e

    logger.debug(
        f"Loaded {len(document.events)} events and {len(document.categories)} categories from {origin}"
    )
    return document


class FileEventSource:
    """
    Reads the events document from a JSON file.

    Implements EventSource protocol.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> EventDocument:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {self.path}: {e}")
            raise DocumentLoadError(f"Could not read {self.path}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse {self.path}: {e}")
            raise DocumentLoadError(f"Invalid JSON in {self.path}") from e

        return parse_document(data, str(self.path))
