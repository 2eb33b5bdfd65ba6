"""eventcal CLI - calendar views over a static events document."""

import json
import logging
import sys
from datetime import date

import click

from .adapters import source_for
from .config import load_config
from .core.dates import date_key
from .core.events import CategoryIndex, Event, EventDocument
from .core.formatting import (
    MONTH_NAMES,
    NO_DATE_TEXT,
    format_date_range,
    format_list_date,
    format_short_range,
)
from .core.grid import WEEK_DAYS, MiniDay, build_month_snapshot, build_year_overview
from .core.query import (
    GroupedEvents,
    events_on_day,
    events_table,
    find_event,
    month_event_list,
    undated_and_uncertain_events,
)
from .core.view_state import ViewState
from .ports import DocumentLoadError

WEEKDAY_HEADER = "Mo Tu We Th Fr Sa Su"
SPAN_MARKERS = {"single": "•", "start": "▶", "middle": "─", "end": "◀"}


def _load(ctx: click.Context) -> EventDocument:
    """Load the events document once per invocation, or exit on failure."""
    if ctx.obj.get("document") is not None:
        return ctx.obj["document"]

    config = ctx.obj["config"]
    source = source_for(ctx.obj["source"] or config.events_source, timeout=config.http_timeout)
    try:
        ctx.obj["document"] = source.load()
    except DocumentLoadError as e:
        click.echo(f"Error: Failed to load event data ({e})", err=True)
        sys.exit(1)
    return ctx.obj["document"]


def _filters(ctx: click.Context, categories: str | None, document: EventDocument) -> frozenset[str]:
    """Category filter from --categories, falling back to the configured default."""
    if categories is not None:
        wanted = [c.strip() for c in categories.split(",") if c.strip()]
    else:
        wanted = ctx.obj["config"].default_categories
    index = document.categories_index
    state = ViewState()
    for category_id in dict.fromkeys(wanted):
        if category_id in index:
            state = state.toggle_filter(category_id)
        else:
            click.echo(f"Warning: unknown category ignored: {category_id}", err=True)
    return state.filters


def _event_json(event: Event, index: CategoryIndex) -> dict:
    category = index.get(event.category)
    data = event.to_dict()
    data["categoryName"] = category.name
    data["displayColor"] = event.display_color(category)
    return data


def _event_line(event: Event, index: CategoryIndex, date_text: str) -> str:
    category = index.get(event.category)
    marker = " (date not confirmed)" if event.date_uncertain else ""
    return f"  {date_text:<16} {event.title} [{category.name}]{marker}"


def _echo_grouped(grouped: GroupedEvents, index: CategoryIndex, date_text) -> None:
    for event in grouped.confirmed:
        click.echo(_event_line(event, index, date_text(event)))
    if grouped.show_separator:
        click.echo("  -- date not confirmed --")
    for event in grouped.uncertain:
        click.echo(_event_line(event, index, date_text(event)))


def _grouped_json(grouped: GroupedEvents, index: CategoryIndex) -> dict:
    return {
        "confirmed": [_event_json(e, index) for e in grouped.confirmed],
        "uncertain": [_event_json(e, index) for e in grouped.uncertain],
    }


def _day_label(day: int, is_adjacent: bool, is_today: bool, has_event: bool) -> str:
    """Two-column day number; adjacent-month days are left blank."""
    if is_adjacent:
        return "  "
    label = f"{day:2d}"
    if is_today:
        return click.style(label, reverse=True)
    if has_event:
        return click.style(label, bold=True)
    return label


def _mini_day_json(day: MiniDay, index: CategoryIndex) -> dict:
    event = day.first_event
    return {
        "day": day.day,
        "adjacent": day.is_adjacent,
        "today": day.is_today,
        "hasEvent": day.has_event,
        "color": event.display_color(index.get(event.category)) if event else None,
        "multiDay": day.has_multi_day,
    }


@click.group()
@click.version_option()
@click.option("--source", "-s", default=None, help="Events JSON file path or URL")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, source: str | None, debug: bool):
    """eventcal - static events calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()
    ctx.obj["source"] = source


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year to show (defaults to config)")
@click.option("--categories", "-c", default=None, help="Comma-separated category ids")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def year(ctx: click.Context, year: int | None, categories: str | None, as_json: bool):
    """Year overview: every month with its events."""
    document = _load(ctx)
    filters = _filters(ctx, categories, document)
    index = document.categories_index
    target_year = year or ctx.obj["config"].year

    summaries = build_year_overview(document.events, filters, target_year)
    uncertain = undated_and_uncertain_events(document.events, filters)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "year": target_year,
                    "months": [
                        {
                            "month": s.month,
                            "name": MONTH_NAMES[s.month],
                            "eventCount": s.event_count,
                            "days": [_mini_day_json(d, index) for d in s.days],
                            "events": _grouped_json(s.events, index),
                        }
                        for s in summaries
                    ],
                    "uncertain": [_event_json(e, index) for e in uncertain],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    for summary in summaries:
        click.echo(f"{MONTH_NAMES[summary.month]} {target_year} ({summary.event_count} events)")
        click.echo(WEEKDAY_HEADER)
        for start in range(0, len(summary.days), WEEK_DAYS):
            week = summary.days[start : start + WEEK_DAYS]
            click.echo(" ".join(_day_label(d.day, d.is_adjacent, d.is_today, d.has_event) for d in week))
        if not summary.events:
            click.echo("  No events")
        _echo_grouped(summary.events, index, format_list_date)
        click.echo()

    if uncertain:
        click.echo("Dates not confirmed")
        for event in uncertain:
            click.echo(_event_line(event, index, format_short_range(event.start_date, event.end_date, True)))


@main.command()
@click.argument("month", type=click.IntRange(1, 12))
@click.option("--year", "-y", type=int, default=None, help="Year (defaults to config)")
@click.option("--categories", "-c", default=None, help="Comma-separated category ids")
@click.option("--cap", type=click.IntRange(min=0), default=None, help="Events shown per day")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def month(
    ctx: click.Context,
    month: int,
    year: int | None,
    categories: str | None,
    cap: int | None,
    as_json: bool,
):
    """Month grid for MONTH (1-12)."""
    document = _load(ctx)
    filters = _filters(ctx, categories, document)
    index = document.categories_index
    config = ctx.obj["config"]
    target_year = year or config.year
    visible_cap = cap if cap is not None else config.visible_cap

    snapshot = build_month_snapshot(document.events, filters, target_year, month - 1, visible_cap)
    grouped = month_event_list(document.events, filters, target_year, month - 1)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "year": target_year,
                    "month": month - 1,
                    "cells": [
                        {
                            "date": cell.key,
                            "adjacent": cell.is_adjacent,
                            "today": cell.is_today,
                            "events": [
                                {"id": p.event.id, "position": p.position.value} for p in cell.events
                            ],
                            "overflow": cell.overflow_count,
                        }
                        for cell in snapshot.cells
                    ],
                    "events": _grouped_json(grouped, index),
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    click.echo(f"{MONTH_NAMES[month - 1]} {target_year}".center(len(WEEKDAY_HEADER)))
    click.echo(WEEKDAY_HEADER)
    for week in snapshot.weeks():
        click.echo(" ".join(_day_label(c.day, c.is_adjacent, c.is_today, bool(c.events)) for c in week))
    click.echo()

    for cell in snapshot.month_cells:
        if not cell.events:
            continue
        click.echo(f"{cell.day:2d}")
        for placed in cell.events:
            click.echo(f"    {SPAN_MARKERS[placed.position.value]} {placed.event.title}")
        if cell.overflow_count:
            click.echo(f"    +{cell.overflow_count} more")
    click.echo()

    if not grouped:
        click.echo("No events this month.")
        return
    _echo_grouped(
        grouped,
        index,
        lambda e: format_date_range(e.start_date, e.end_date, e.date_uncertain),
    )


@main.command()
@click.argument("day")
@click.option("--categories", "-c", default=None, help="Comma-separated category ids")
@click.option("--include-uncertain", is_flag=True, help="Include events with unconfirmed dates")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def day(ctx: click.Context, day: str, categories: str | None, include_uncertain: bool, as_json: bool):
    """Events on DAY (YYYY-MM-DD)."""
    try:
        target = date.fromisoformat(day)
    except ValueError:
        raise click.BadParameter(f"{day!r} is not a YYYY-MM-DD date", param_hint="DAY")

    document = _load(ctx)
    filters = _filters(ctx, categories, document)
    index = document.categories_index
    year_, month_, day_ = target.year, target.month - 1, target.day
    events = events_on_day(document.events, filters, year_, month_, day_, include_uncertain)

    if as_json:
        click.echo(json.dumps([_event_json(e, index) for e in events], indent=2, ensure_ascii=False))
        return

    if not events:
        click.echo(f"No events on {date_key(year_, month_, day_)}.")
        return
    for event in events:
        click.echo(_event_line(event, index, format_short_range(event.start_date, event.end_date, event.date_uncertain)))


@main.command()
@click.option("--categories", "-c", default=None, help="Comma-separated category ids")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def uncertain(ctx: click.Context, categories: str | None, as_json: bool):
    """Events with unconfirmed or missing dates."""
    document = _load(ctx)
    filters = _filters(ctx, categories, document)
    index = document.categories_index
    events = undated_and_uncertain_events(document.events, filters)

    if as_json:
        click.echo(json.dumps([_event_json(e, index) for e in events], indent=2, ensure_ascii=False))
        return

    if not events:
        click.echo("No events with unconfirmed dates.")
        return
    for event in events:
        click.echo(_event_line(event, index, format_short_range(event.start_date, event.end_date, True)))


@main.command("list")
@click.option("--categories", "-c", default=None, help="Comma-separated category ids")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_events(ctx: click.Context, categories: str | None, as_json: bool):
    """Flat table of all events."""
    document = _load(ctx)
    filters = _filters(ctx, categories, document)
    index = document.categories_index
    grouped = events_table(document.events, filters)

    if as_json:
        click.echo(json.dumps(_grouped_json(grouped, index), indent=2, ensure_ascii=False))
        return

    if not grouped.confirmed:
        click.echo("No events to show.")
    for event in grouped.confirmed:
        click.echo(_event_line(event, index, format_short_range(event.start_date, event.end_date)))
    if grouped.uncertain:
        click.echo()
        click.echo("Dates not confirmed")
        for event in grouped.uncertain:
            click.echo(_event_line(event, index, format_short_range(event.start_date, event.end_date, True)))


@main.command()
@click.argument("event_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, event_id: str, as_json: bool):
    """Details of one event."""
    document = _load(ctx)
    index = document.categories_index
    event = find_event(document.events, event_id)
    if event is None:
        click.echo(f"No event with id {event_id!r}.")
        return

    if as_json:
        click.echo(json.dumps(_event_json(event, index), indent=2, ensure_ascii=False))
        return

    category = index.get(event.category)
    if event.date_range is None:
        when = NO_DATE_TEXT
    else:
        when = format_date_range(event.start_date, event.end_date, event.date_uncertain)
        if event.date_uncertain:
            when += " (date not confirmed)"

    click.echo(event.title)
    click.echo(f"Category:    {category.name}")
    click.echo(f"Date:        {when}")
    click.echo(f"Location:    {event.location or 'Not specified'}")
    click.echo(f"Description: {event.description or 'No description yet'}")
    if event.has_link:
        click.echo(f"Link:        {event.url}")


@main.command()
@click.pass_context
def categories(ctx: click.Context):
    """List categories available for filtering."""
    document = _load(ctx)
    for category in document.categories_index:
        click.echo(f"{category.id:<20} {category.name} ({category.color})")


@main.command("open")
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def open_view(ctx: click.Context, query: str, as_json: bool):
    """Render the view encoded in a URL QUERY string (categories=...&month=...)."""
    document = _load(ctx)
    state = ViewState.from_query(query, document.categories_index)
    categories = ",".join(sorted(state.filters))
    if state.is_year_view:
        ctx.invoke(year, categories=categories, as_json=as_json)
    else:
        ctx.invoke(month, month=state.month + 1, categories=categories, as_json=as_json)
