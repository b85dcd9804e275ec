"""Normalizers for provider data."""

from acting_calendar.normalizers.event import (
    LISTING_DURATION,
    LONDON,
    MAX_DESCRIPTION_LENGTH,
    clean_text,
    normalize_event,
    parse_datetime,
    resolve_url,
    truncate_description,
)

__all__ = [
    "LISTING_DURATION",
    "LONDON",
    "MAX_DESCRIPTION_LENGTH",
    "clean_text",
    "normalize_event",
    "parse_datetime",
    "resolve_url",
    "truncate_description",
]
