"""Event normalizer: maps provider fields onto the common Event shape."""

import re
from datetime import datetime, timedelta
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from dateutil import parser
from pydantic import ValidationError

from acting_calendar.models import DEFAULT_LOCATION, DEFAULT_TIMEZONE, Event

LONDON = DEFAULT_TIMEZONE

MAX_DESCRIPTION_LENGTH = 200

# Listing pages rarely publish an end time
LISTING_DURATION = timedelta(hours=2)

HTML_MARKUP_RE = re.compile(r"<[a-zA-Z/][^>]*>")


def clean_text(value: Optional[Any]) -> str:
    """Collapse whitespace; strip markup if the value looks like HTML."""
    if value is None:
        return ""
    text = str(value)
    if HTML_MARKUP_RE.search(text):
        text = BeautifulSoup(text, "lxml").get_text(" ")
    return " ".join(text.split())


def truncate_description(value: Optional[Any], max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Clean scraped description text and cap it at max_length characters."""
    return clean_text(value)[:max_length]


def parse_datetime(
    value: Optional[Any],
    default_tz=LONDON,
    fuzzy: bool = False,
    default: Optional[datetime] = None,
) -> Optional[datetime]:
    """Parse a date/time value into an aware datetime.

    Naive results are interpreted in ``default_tz``. Returns None for empty
    or unparseable input.
    """
    if isinstance(value, datetime):
        dt = value
    elif not value or not isinstance(value, str):
        return None
    else:
        try:
            dt = parser.parse(value.strip(), fuzzy=fuzzy, default=default)
        except (ValueError, OverflowError):
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=default_tz)
    return dt


def base_origin(url: str) -> str:
    """scheme://host of a URL."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def resolve_url(href: Optional[str], page_url: str) -> str:
    """Resolve a (possibly relative) link against the page's origin.

    Falls back to the page URL when there is no link.
    """
    href = (href or "").strip()
    if not href:
        return page_url
    if urlsplit(href).scheme in ("http", "https"):
        return href
    return urljoin(base_origin(page_url) + "/", href)


def normalize_event(
    *,
    title: Optional[Any],
    start: Optional[Any],
    source: str,
    page_url: str,
    end: Optional[Any] = None,
    location: Optional[Any] = None,
    description: Optional[Any] = None,
    url: Optional[str] = None,
    default_duration: timedelta = timedelta(0),
) -> Optional[Event]:
    """Build an Event from loosely-typed provider fields.

    Returns None when the title is empty or the start cannot be parsed.
    A missing or unparseable end becomes ``start + default_duration``.
    """
    title_text = clean_text(title)
    start_dt = parse_datetime(start)
    if not title_text or start_dt is None:
        return None

    end_dt = parse_datetime(end) or start_dt + default_duration

    try:
        return Event(
            title=title_text,
            start=start_dt,
            end=end_dt,
            location=clean_text(location) or DEFAULT_LOCATION,
            description=truncate_description(description),
            url=resolve_url(url, page_url),
            source=source,
        )
    except ValidationError:
        return None
