"""iCalendar feed writer."""

import hashlib
from pathlib import Path

from ics import Calendar
from ics import Event as IcsEvent
from ics.grammar.parse import ContentLine
from rich.console import Console

from acting_calendar.config import Settings
from acting_calendar.models import Event

console = Console()

CALENDAR_NAME = "London Acting Industry Events"
CALENDAR_DESCRIPTION = "Automated calendar of acting, theatre, and film industry events in London"
CALENDAR_FILE = "calendar.ics"


def event_uid(event: Event) -> str:
    """Stable UID so calendar apps update entries instead of duplicating them."""
    base = f"{event.title}|{event.start_iso}"
    return f"{hashlib.sha1(base.encode('utf-8')).hexdigest()}@acting-calendar"


def to_ics_event(event: Event) -> IcsEvent:
    e = IcsEvent()
    e.uid = event_uid(event)
    e.name = event.title
    e.begin = event.start
    # ics refuses end < begin; such events are published without an end
    if event.end >= event.start:
        e.end = event.end

    description = event.description
    e.description = f"{description}\n\nSource: {event.source}" if description else f"Source: {event.source}"

    if event.location:
        e.location = event.location
    if event.url:
        e.url = event.url
    return e


def build_calendar(events: list[Event], settings: Settings) -> Calendar:
    """One VEVENT per event plus feed-level name, description and timezone."""
    calendar = Calendar()
    calendar.extra.append(ContentLine(name="X-WR-CALNAME", value=CALENDAR_NAME))
    calendar.extra.append(ContentLine(name="X-WR-CALDESC", value=CALENDAR_DESCRIPTION))
    calendar.extra.append(ContentLine(name="X-WR-TIMEZONE", value=settings.timezone))

    for event in events:
        calendar.events.add(to_ics_event(event))

    return calendar


def write_calendar(events: list[Event], settings: Settings) -> Path:
    """Serialize the feed to ``<output_dir>/calendar.ics``."""
    calendar = build_calendar(events, settings)

    settings.output_dir.mkdir(parents=True, exist_ok=True)
    path = settings.output_dir / CALENDAR_FILE
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.writelines(calendar.serialize_iter())

    console.print(f"[dim]Wrote {path} ({len(events)} events)[/dim]")
    return path
