"""Tests for the eventcal CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from eventcal.adapters import FileEventSource
from eventcal.cli import main
from eventcal.config import Config

DOCUMENT = {
    "categories": [
        {"id": "con", "name": "Conventions", "color": "#f97316"},
        {"id": "meet", "name": "Meetups", "color": "#22c55e"},
    ],
    "events": [
        {
            "id": "winter-con",
            "title": "Winter Con",
            "category": "con",
            "startDate": "2026-01-30",
            "endDate": "2026-02-02",
            "location": "Expo Hall",
            "url": "https://example.org/winter",
        },
        {"id": "picnic", "title": "Park Picnic", "category": "meet", "startDate": "2026-01-31", "endDate": "2026-01-31"},
        {
            "id": "tentative",
            "title": "Spring Walk",
            "category": "meet",
            "startDate": "2026-01-10",
            "endDate": "2026-01-10",
            "dateUncertain": True,
        },
        {"id": "someday", "title": "Someday Party", "category": "meet", "startDate": "", "endDate": "", "dateUncertain": True},
    ],
}


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


@pytest.fixture
def run(events_file):
    runner = CliRunner()

    def _run(*args):
        with patch("eventcal.cli.load_config", return_value=Config(year=2026)):
            return runner.invoke(main, ["--source", str(events_file), *args])

    return _run


class TestLoadFailure:
    def test_missing_document_exits_1(self, tmp_path):
        runner = CliRunner()
        with patch("eventcal.cli.load_config", return_value=Config(year=2026)):
            result = runner.invoke(main, ["--source", str(tmp_path / "missing.json"), "year"])
        assert result.exit_code == 1
        assert "Failed to load event data" in result.output


class TestMonthCommand:
    def test_json_snapshot(self, run):
        result = run("month", "1", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["cells"]) == 42
        by_date = {c["date"]: c for c in data["cells"]}
        assert by_date["2026-01-30"]["events"] == [{"id": "winter-con", "position": "start"}]
        assert [e["id"] for e in by_date["2026-01-31"]["events"]] == ["winter-con", "picnic"]
        assert by_date["2026-01-10"]["events"] == []
        assert [e["id"] for e in data["events"]["uncertain"]] == ["tentative"]

    def test_text_output(self, run):
        result = run("month", "1")
        assert result.exit_code == 0
        assert "January 2026" in result.output
        assert "Mo Tu We Th Fr Sa Su" in result.output
        assert "▶ Winter Con" in result.output
        assert "-- date not confirmed --" in result.output

    def test_overflow(self, run):
        result = run("month", "1", "--cap", "1")
        assert "+1 more" in result.output

    def test_category_filter(self, run):
        result = run("month", "1", "--categories", "meet", "--json")
        data = json.loads(result.output)
        assert [e["id"] for e in data["events"]["confirmed"]] == ["picnic"]

    def test_unknown_category_warns(self, run):
        result = run("month", "1", "--categories", "bogus")
        assert result.exit_code == 0
        assert "unknown category ignored: bogus" in result.output

    def test_month_out_of_range(self, run):
        assert run("month", "13").exit_code != 0


class TestYearCommand:
    def test_json(self, run):
        data = json.loads(run("year", "--json").output)
        assert data["year"] == 2026
        assert [m["eventCount"] for m in data["months"][:3]] == [2, 1, 0]
        assert [e["id"] for e in data["uncertain"]] == ["tentative", "someday"]

    def test_text(self, run):
        result = run("year")
        assert "January 2026 (2 events)" in result.output
        assert "Dates not confirmed" in result.output
        assert "Date TBD" in result.output

    def test_json_mini_calendar(self, run):
        january = json.loads(run("year", "--json").output)["months"][0]
        days = january["days"]
        assert len(days) == 42
        in_month = {d["day"]: d for d in days if not d["adjacent"]}
        assert in_month[31]["hasEvent"] is True
        assert in_month[31]["multiDay"] is True
        assert in_month[31]["color"] == "#f97316"
        # uncertain events stay off the mini-calendar
        assert in_month[10]["hasEvent"] is False
        assert in_month[10]["color"] is None

    def test_text_mini_calendar(self, run):
        output = run("year").output
        assert "Mo Tu We Th Fr Sa Su" in output
        # January 2026 starts on a Thursday
        assert "          1  2  3  4" in output


class TestDayCommand:
    def test_events_on_day(self, run):
        data = json.loads(run("day", "2026-01-31", "--json").output)
        assert [e["id"] for e in data] == ["winter-con", "picnic"]
        assert data[0]["categoryName"] == "Conventions"

    def test_include_uncertain(self, run):
        data = json.loads(run("day", "2026-01-10", "--include-uncertain", "--json").output)
        assert [e["id"] for e in data] == ["tentative"]

    def test_empty_day(self, run):
        assert "No events on 2026-03-01." in run("day", "2026-03-01").output

    def test_bad_date(self, run):
        assert run("day", "31/01/2026").exit_code != 0


class TestListingCommands:
    def test_uncertain(self, run):
        data = json.loads(run("uncertain", "--json").output)
        assert [e["id"] for e in data] == ["tentative", "someday"]

    def test_list(self, run):
        data = json.loads(run("list", "--json").output)
        assert [e["id"] for e in data["confirmed"]] == ["winter-con", "picnic"]
        assert [e["id"] for e in data["uncertain"]] == ["tentative", "someday"]

    def test_categories(self, run):
        result = run("categories")
        assert "Conventions" in result.output
        assert "Meetups" in result.output


class TestShowCommand:
    def test_details(self, run):
        result = run("show", "winter-con")
        assert result.exit_code == 0
        assert "Winter Con" in result.output
        assert "30 January 2026 – 2 February 2026" in result.output
        assert "Expo Hall" in result.output
        assert "https://example.org/winter" in result.output

    def test_uncertain_details(self, run):
        result = run("show", "tentative")
        assert "≈ 10 January 2026 (date not confirmed)" in result.output

    def test_unknown_id_is_noop(self, run):
        result = run("show", "nope")
        assert result.exit_code == 0
        assert "No event with id 'nope'." in result.output


class TestOpenCommand:
    def test_document_loaded_once(self, run):
        with patch.object(FileEventSource, "load", autospec=True, side_effect=FileEventSource.load) as load:
            result = run("open", "month=0", "--json")
        assert result.exit_code == 0
        assert load.call_count == 1

    def test_month_view_from_query(self, run):
        data = json.loads(run("open", "categories=con&month=1", "--json").output)
        assert data["month"] == 1
        assert [e["id"] for e in data["events"]["confirmed"]] == ["winter-con"]

    def test_year_view_from_query(self, run):
        data = json.loads(run("open", "", "--json").output)
        assert len(data["months"]) == 12
