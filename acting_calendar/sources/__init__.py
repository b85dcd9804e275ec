"""Event sources: scraped providers and the hand-curated list."""

from acting_calendar.sources.manual import MANUAL_EVENTS, MANUAL_SOURCE, load_manual_events
from acting_calendar.sources.providers import PROVIDERS, Provider, collect_provider, get_provider

__all__ = [
    "MANUAL_EVENTS",
    "MANUAL_SOURCE",
    "load_manual_events",
    "PROVIDERS",
    "Provider",
    "collect_provider",
    "get_provider",
]
