"""Tests for the file and HTTP event source adapters."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from eventcal.adapters import FileEventSource, HttpEventSource, source_for
from eventcal.ports import DocumentLoadError

DOCUMENT = {
    "events": [
        {
            "id": "winter-con",
            "title": "Winter Con",
            "category": "con",
            "startDate": "2026-01-30",
            "endDate": "2026-02-02",
        },
        {"id": "someday", "title": "Someday", "category": "meet", "startDate": "", "endDate": "", "dateUncertain": True},
    ],
    "categories": [{"id": "con", "name": "Conventions", "color": "#f97316"}],
}


class TestFileEventSource:
    def test_loads_document(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps(DOCUMENT), encoding="utf-8")

        document = FileEventSource(path).load()

        assert [e.id for e in document.events] == ["winter-con", "someday"]
        assert document.events[1].date_range is None
        assert document.categories_index.get("con").name == "Conventions"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError):
            FileEventSource(tmp_path / "nope.json").load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            FileEventSource(path).load()

    def test_wrong_top_level_shape(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            FileEventSource(path).load()

    def test_record_without_id(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps({"events": [{"title": "No id"}]}), encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            FileEventSource(path).load()


class TestHttpEventSource:
    def test_loads_document(self):
        session = MagicMock()
        session.get.return_value.json.return_value = DOCUMENT

        document = HttpEventSource("https://example.org/events.json", timeout=5, session=session).load()

        session.get.assert_called_once_with("https://example.org/events.json", timeout=5)
        assert len(document.events) == 2

    def test_http_error(self):
        session = MagicMock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
        with pytest.raises(DocumentLoadError):
            HttpEventSource("https://example.org/events.json", session=session).load()

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")
        with pytest.raises(DocumentLoadError):
            HttpEventSource("https://example.org/events.json", session=session).load()

    def test_invalid_json(self):
        session = MagicMock()
        session.get.return_value.json.side_effect = ValueError("no json")
        with pytest.raises(DocumentLoadError):
            HttpEventSource("https://example.org/events.json", session=session).load()


class TestSourceFor:
    def test_url(self):
        assert isinstance(source_for("https://example.org/events.json"), HttpEventSource)

    def test_path(self):
        assert isinstance(source_for("events.json"), FileEventSource)
