"""Registry of extraction strategies, keyed by name.

Providers refer to a strategy by name; adding a provider never touches
the pipeline, and adding a strategy only means registering it here.
"""

from datetime import datetime
from typing import Any, Callable, Iterator, Optional, Protocol

from acting_calendar.extractors.heuristics import ListingExtractor, ListingSelectors
from acting_calendar.extractors.structured import StructuredDataExtractor
from acting_calendar.models import Event


class Extractor(Protocol):
    """Shared contract of every extraction strategy."""

    name: str
    source: str

    def extract(self, html: str, base_url: str, now: Optional[datetime] = None) -> Iterator[Event]: ...


def _structured(source: str, options: dict[str, Any]) -> Extractor:
    return StructuredDataExtractor(source)


def _listing(source: str, options: dict[str, Any]) -> Extractor:
    selectors = ListingSelectors.model_validate(options.get("selectors") or {})
    return ListingExtractor(source, selectors=selectors)


STRATEGIES: dict[str, Callable[[str, dict[str, Any]], Extractor]] = {
    "structured": _structured,
    "listing": _listing,
}


def build_extractor(strategy: str, source: str, options: Optional[dict[str, Any]] = None) -> Extractor:
    """Instantiate the named strategy for a source."""
    try:
        factory = STRATEGIES[strategy]
    except KeyError as e:
        raise KeyError(f"Unknown extraction strategy '{strategy}'. Registered: {list(STRATEGIES)}") from e
    return factory(source, options or {})
