"""Provider definitions and per-provider collection.

Each provider lists the pages to fetch (one per search term) and the
extraction strategy for them. Pages of one provider are fetched one after
another with a fixed delay; providers themselves run concurrently.
"""

import asyncio
from datetime import datetime
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field
from rich.console import Console

from acting_calendar.extractors import build_extractor, fetch_page
from acting_calendar.models import Event

console = Console()

EVENTBRITE_SEARCH_URL = "https://www.eventbrite.co.uk/d/united-kingdom--london/{term}/"
MEETUP_SEARCH_URL = "https://www.meetup.com/find/?keywords={term}&location=gb--17--London&source=EVENTS"


class Provider(BaseModel):
    """An external listing site contributing candidate events."""

    name: str
    strategy: str  # key into extractors.registry.STRATEGIES
    urls: list[str]
    delay: float = 1.0  # Seconds between this provider's requests
    options: dict[str, Any] = Field(default_factory=dict)


PROVIDERS: list[Provider] = [
    Provider(
        name="Eventbrite",
        strategy="structured",
        urls=[
            EVENTBRITE_SEARCH_URL.format(term=term)
            for term in ["acting", "acting-workshop", "theatre", "drama", "casting"]
        ],
        delay=1.5,
    ),
    Provider(
        name="Meetup",
        strategy="structured",
        urls=[MEETUP_SEARCH_URL.format(term=term) for term in ["acting", "theatre", "improv"]],
        delay=1.0,
    ),
    Provider(
        name="Actors Centre",
        strategy="listing",
        urls=["https://www.actorscentre.co.uk/whats-on"],
        options={
            "selectors": {
                "card": ".event-card, article",
                "title": "h3, h2",
                "date": "time, .event-card__date",
                "description": ".event-card__summary, p",
            },
        },
    ),
]


def get_provider(name: str) -> Provider:
    """Look up a registered provider by name (case-insensitive)."""
    for provider in PROVIDERS:
        if provider.name.lower() == name.lower():
            return provider
    raise KeyError(f"Unknown provider '{name}'. Registered: {[p.name for p in PROVIDERS]}")


async def collect_provider(
    provider: Provider,
    client: httpx.AsyncClient,
    now: Optional[datetime] = None,
) -> list[Event]:
    """Fetch and extract every page of one provider, sequentially.

    Pages that fail to fetch contribute nothing; the remaining pages are
    still processed.
    """
    extractor = build_extractor(provider.strategy, provider.name, provider.options)
    events: list[Event] = []

    for i, url in enumerate(provider.urls):
        if i > 0:
            await asyncio.sleep(provider.delay)

        html = await fetch_page(client, url)
        if not html:
            continue

        found = list(extractor.extract(html, url, now=now))
        console.print(f"[dim]{provider.name}: {len(found)} events from {url}[/dim]")
        events.extend(found)

    return events
