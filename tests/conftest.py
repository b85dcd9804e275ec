"""Shared test fixtures and configuration."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from acting_calendar.models import Event

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_event(
    title: str = "Audition Masterclass",
    start: datetime = NOW + timedelta(days=7),
    source: str = "Manual",
    **kwargs,
) -> Event:
    """Build an Event with sensible defaults for tests."""
    return Event(
        title=title,
        start=start,
        end=kwargs.pop("end", start + timedelta(hours=2)),
        source=source,
        **kwargs,
    )


def ld_page(*blocks) -> str:
    """HTML page embedding each block as a JSON-LD script."""
    scripts = "\n".join(
        f'<script type="application/ld+json">{b if isinstance(b, str) else json.dumps(b)}</script>'
        for b in blocks
    )
    return f"<html><head>{scripts}</head><body><h1>Events</h1></body></html>"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sample_event() -> Event:
    """Create a sample event for testing."""
    return make_event(
        title="Panel Talk",
        start=datetime(2026, 11, 20, 19, 0, tzinfo=timezone.utc),
        location="BFI Southbank, Belvedere Road, London SE1 8XT",
        description="Screen acting panel",
        url="https://www.eventbrite.co.uk/e/panel-talk-123",
        source="Eventbrite",
    )


@pytest.fixture
def event_factory():
    """Factory for Events with defaults (see make_event)."""
    return make_event


@pytest.fixture
def jsonld_page():
    """Builder for HTML pages embedding JSON-LD blocks."""
    return ld_page
