"""Data models for the events pipeline."""

from acting_calendar.models.event import DEFAULT_LOCATION, DEFAULT_TIMEZONE, Event, SnapshotEntry

__all__ = [
    "DEFAULT_LOCATION",
    "DEFAULT_TIMEZONE",
    "Event",
    "SnapshotEntry",
]
