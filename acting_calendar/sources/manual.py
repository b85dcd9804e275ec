"""Hand-curated events for venues without a scrapeable listing."""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console

from acting_calendar.models import DEFAULT_LOCATION, Event
from acting_calendar.normalizers import LONDON, clean_text, parse_datetime

console = Console()

MANUAL_SOURCE = "Manual"


def _manual(
    title: str,
    start: datetime,
    end: datetime,
    location: str,
    description: str,
    url: str,
) -> Event:
    return Event(
        title=title,
        start=start.replace(tzinfo=LONDON),
        end=end.replace(tzinfo=LONDON),
        location=location,
        description=description,
        url=url,
        source=MANUAL_SOURCE,
    )


MANUAL_EVENTS: list[Event] = [
    _manual(
        "The Cockpit Theatre - New Writing Platform",
        datetime(2026, 2, 15, 19, 30), datetime(2026, 2, 15, 21, 30),
        "The Cockpit Theatre, Gateforth Street, London NW8 8EH",
        "Monthly new writing showcase. Check thecockpit.org.uk for updates.",
        "https://thecockpit.org.uk",
    ),
    _manual(
        "Mixing Networks - Industry Mixer",
        datetime(2026, 2, 20, 18, 0), datetime(2026, 2, 20, 21, 0),
        "Central London (TBC)",
        "Networking for TV & Film professionals. Visit mixingnetworks.com",
        "https://mixingnetworks.com",
    ),
    _manual(
        "Omnibus Theatre - Actors Lab",
        datetime(2026, 2, 25, 19, 0), datetime(2026, 2, 25, 22, 0),
        "Omnibus Theatre, 1 Clapham Common North Side, London SW4 0QW",
        "Experimental performance workshop. Check omnibus-clapham.org",
        "https://omnibus-clapham.org",
    ),
    _manual(
        "The New Diorama - Scratch Night",
        datetime(2026, 3, 1, 19, 30), datetime(2026, 3, 1, 22, 0),
        "The New Diorama, 15-16 Triton Street, London NW1 3BF",
        "Showcase of work in development. Visit newdiorama.com",
        "https://newdiorama.com",
    ),
    _manual(
        "National Theatre - Platform Talk",
        datetime(2026, 3, 5, 18, 30), datetime(2026, 3, 5, 20, 0),
        "National Theatre, South Bank, London SE1 9PX",
        "Industry insights and Q&A. Check nationaltheatre.org.uk",
        "https://www.nationaltheatre.org.uk",
    ),
    _manual(
        "Shakespeare's Globe - Workshop",
        datetime(2026, 3, 10, 10, 0), datetime(2026, 3, 10, 13, 0),
        "Shakespeare's Globe, 21 New Globe Walk, London SE1 9DT",
        "Original practices workshop. Visit shakespearesglobe.com",
        "https://www.shakespearesglobe.com",
    ),
    _manual(
        "TheatreDeli - Creative Networking",
        datetime(2026, 3, 12, 12, 30), datetime(2026, 3, 12, 14, 30),
        "TheatreDeli, 107 Leadenhall Street, London EC3A 4AF",
        "Informal networking lunch. Check theatredeli.co.uk",
        "https://theatredeli.co.uk",
    ),
    _manual(
        "BFI - Screen Acting Masterclass",
        datetime(2026, 3, 15, 14, 0), datetime(2026, 3, 15, 17, 0),
        "BFI Southbank, Belvedere Road, London SE1 8XT",
        "Film industry masterclass. Visit bfi.org.uk",
        "https://www.bfi.org.uk",
    ),
    _manual(
        "Equity - Members Meeting",
        datetime(2026, 3, 18, 19, 0), datetime(2026, 3, 18, 21, 0),
        "Equity Office, Guild House, Upper St Martin's Lane, London WC2H 9EG",
        "Professional development session. Check equity.org.uk",
        "https://www.equity.org.uk",
    ),
    _manual(
        "Royal Television Society - Industry Panel",
        datetime(2026, 3, 22, 18, 0), datetime(2026, 3, 22, 20, 0),
        "London (Venue TBC)",
        "TV drama panel discussion. Visit rts.org.uk",
        "https://rts.org.uk",
    ),
]


def load_manual_events(path: Path) -> list[Event]:
    """Load extra curated events from a JSON array.

    Each object needs ``title`` and ``start``; ``end`` defaults to ``start``.
    Invalid entries are skipped with a warning. A missing or unreadable file
    raises, since the caller asked for it explicitly.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of events")

    events: list[Event] = []
    for i, item in enumerate(data):
        event = _parse_manual_item(item)
        if event is None:
            console.print(f"[yellow]Skipping manual event #{i} in {path}: missing title or start[/yellow]")
            continue
        events.append(event)

    console.print(f"[dim]Loaded {len(events)} manual events from {path}[/dim]")
    return events


def _parse_manual_item(item: object) -> Optional[Event]:
    if not isinstance(item, dict):
        return None

    start = parse_datetime(item.get("start"))
    if start is None:
        return None

    try:
        return Event(
            title=item.get("title"),
            start=start,
            end=parse_datetime(item.get("end")) or start,
            location=clean_text(item.get("location")) or DEFAULT_LOCATION,
            description=clean_text(item.get("description")),
            url=clean_text(item.get("url")),
            source=MANUAL_SOURCE,
        )
    except ValidationError:
        return None
