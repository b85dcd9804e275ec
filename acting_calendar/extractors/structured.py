"""Extract events from Schema.org JSON-LD blocks embedded in a page."""

import json
from datetime import datetime
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup

from acting_calendar.models import Event
from acting_calendar.normalizers import normalize_event

# Event types we care about
EVENT_TYPES = {
    "Event",
    "TheaterEvent",
    "EducationEvent",
    "BusinessEvent",
    "SocialEvent",
    "ScreeningEvent",
    "Festival",
}


def is_event_block(block: Any) -> bool:
    """True if a JSON-LD node describes an Event (or a subtype)."""
    if not isinstance(block, dict):
        return False
    block_type = block.get("@type", "")
    # Handle arrays of types
    if isinstance(block_type, list):
        return any(isinstance(t, str) and t in EVENT_TYPES for t in block_type)
    return isinstance(block_type, str) and block_type in EVENT_TYPES


def extract_json_ld(soup: BeautifulSoup) -> list[Any]:
    """Parse all JSON-LD script blocks, skipping invalid ones."""
    blocks = []

    for script in soup.find_all("script", type="application/ld+json"):
        try:
            blocks.append(json.loads(script.string or ""))
        except (json.JSONDecodeError, TypeError):
            continue

    return blocks


def event_nodes(block: Any) -> list[dict]:
    """Event nodes of a JSON-LD block.

    A block is either a single Event object or an array whose first element
    is an Event; other shapes carry no events.
    """
    if is_event_block(block):
        return [block]
    if isinstance(block, list) and block and is_event_block(block[0]):
        return [node for node in block if is_event_block(node)]
    return []


def location_text(location: Any) -> Optional[str]:
    """Flatten a Schema.org location (Place or text) into one line."""
    if isinstance(location, list):
        return location_text(location[0]) if location else None
    if isinstance(location, str):
        return location
    if not isinstance(location, dict):
        return None

    address = location.get("address")
    if isinstance(address, dict):
        parts = [
            address.get("streetAddress"),
            address.get("addressLocality"),
            address.get("postalCode"),
        ]
        joined = ", ".join(str(p).strip() for p in parts if p and str(p).strip())
        if joined:
            return joined
    elif isinstance(address, str) and address.strip():
        return address

    return location.get("name")


class StructuredDataExtractor:
    """Strategy for pages that embed Schema.org ``Event`` JSON-LD."""

    name = "structured"

    def __init__(self, source: str):
        self.source = source

    def extract(self, html: str, base_url: str, now: Optional[datetime] = None) -> Iterator[Event]:
        """Yield one Event per valid JSON-LD Event node.

        ``now`` is accepted for interface parity; time filtering happens in
        the pipeline. Nodes without a name or a parseable start are skipped.
        """
        soup = BeautifulSoup(html, "lxml")

        for block in extract_json_ld(soup):
            for node in event_nodes(block):
                event = self._to_event(node, base_url)
                if event:
                    yield event

    def _to_event(self, node: dict, base_url: str) -> Optional[Event]:
        name = node.get("name")
        if not isinstance(name, str):
            return None
        url = node.get("url")
        return normalize_event(
            title=name,
            start=node.get("startDate"),
            end=node.get("endDate"),
            location=location_text(node.get("location")),
            description=node.get("description"),
            url=url if isinstance(url, str) else None,
            source=self.source,
            page_url=base_url,
        )
