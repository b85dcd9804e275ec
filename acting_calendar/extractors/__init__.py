"""Page → Event extraction.

This package turns fetched provider pages into normalized events:
1. Fetches HTML with a fixed browser-like User-Agent
2. Extracts events with a per-source strategy:
   - Schema.org JSON-LD Event blocks
   - Heuristic scraping of listing cards
3. Returns normalized Event records
"""

from acting_calendar.extractors.fetch import create_client, fetch_page
from acting_calendar.extractors.heuristics import ListingExtractor, ListingSelectors
from acting_calendar.extractors.registry import STRATEGIES, Extractor, build_extractor
from acting_calendar.extractors.structured import StructuredDataExtractor

__all__ = [
    "create_client",
    "fetch_page",
    "ListingExtractor",
    "ListingSelectors",
    "StructuredDataExtractor",
    "STRATEGIES",
    "Extractor",
    "build_extractor",
]
