"""Heuristic extraction for listing pages without structured data.

Listing sites repeat a card-like block per event. We look for a title, a
date string, a short description and a link inside each card, and only
keep cards whose date parses to a point strictly in the future.
"""

from datetime import datetime, time, timezone
from typing import Iterator, Optional

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel

from acting_calendar.models import Event
from acting_calendar.normalizers import (
    LISTING_DURATION,
    LONDON,
    clean_text,
    normalize_event,
    parse_datetime,
)


class ListingSelectors(BaseModel):
    """CSS selectors locating the parts of a listing card."""

    card: str = "article, li.event, div.event, .event-card, .listing-item"
    title: str = "h2, h3, .event-title, .title"
    date: str = "time, .event-date, .date"
    description: str = ".description, .summary, p"
    link: str = "a[href]"

    class Config:
        extra = "ignore"


def select_text(card: Tag, selector: str) -> str:
    """Cleaned text of the first element matching selector, or ''."""
    element = card.select_one(selector)
    if element is None:
        return ""
    return clean_text(element.get_text(" ", strip=True))


def date_text(card: Tag, selector: str) -> tuple[str, bool]:
    """Date string of a card and whether it is machine-readable.

    A ``<time datetime="...">`` attribute wins over visible text.
    """
    element = card.select_one(selector)
    if element is None:
        return "", False
    machine = element.get("datetime")
    if isinstance(machine, str) and machine.strip():
        return machine.strip(), True
    return clean_text(element.get_text(" ", strip=True)), False


def card_link(card: Tag, selector: str) -> Optional[str]:
    """href of the card itself if it is a link, else of its first link."""
    if card.name == "a" and card.get("href"):
        return card["href"]
    element = card.select_one(selector)
    if element is None:
        return None
    href = element.get("href")
    return href if isinstance(href, str) else None


class ListingExtractor:
    """Strategy for HTML listing pages scraped card by card."""

    name = "listing"

    def __init__(self, source: str, selectors: Optional[ListingSelectors] = None):
        self.source = source
        self.selectors = selectors or ListingSelectors()

    def extract(self, html: str, base_url: str, now: Optional[datetime] = None) -> Iterator[Event]:
        """Yield events from every listing card that has a future date."""
        now = now or datetime.now(timezone.utc)
        soup = BeautifulSoup(html, "lxml")

        # Remove elements that never hold listings
        for tag in soup.find_all(["script", "style", "nav", "footer"]):
            tag.decompose()

        for card in soup.select(self.selectors.card):
            event = self._card_to_event(card, base_url, now)
            if event:
                yield event

    def _card_to_event(self, card: Tag, base_url: str, now: datetime) -> Optional[Event]:
        title = select_text(card, self.selectors.title)
        when, machine_readable = date_text(card, self.selectors.date)
        if not title or not when:
            return None

        # Fill missing date parts (year, time) from today in London
        today = datetime.combine(now.astimezone(LONDON).date(), time.min)
        start = parse_datetime(when, fuzzy=not machine_readable, default=today)
        if start is None or start <= now:
            return None

        return normalize_event(
            title=title,
            start=start,
            description=select_text(card, self.selectors.description),
            url=card_link(card, self.selectors.link),
            source=self.source,
            page_url=base_url,
            default_duration=LISTING_DURATION,
        )
