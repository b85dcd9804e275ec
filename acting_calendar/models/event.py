"""Data models for the events pipeline."""

from datetime import datetime, timezone

from dateutil import tz
from pydantic import BaseModel, field_validator

DEFAULT_LOCATION = "London, UK"
DEFAULT_TIMEZONE = tz.gettz("Europe/London")


class Event(BaseModel):
    """A single calendar-worthy event."""

    title: str
    start: datetime
    end: datetime
    location: str = DEFAULT_LOCATION
    description: str = ""
    url: str = ""
    source: str = "Manual"

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("start", "end")
    @classmethod
    def localize_naive(cls, value: datetime) -> datetime:
        """Naive times are London wall-clock times."""
        if value.tzinfo is None:
            return value.replace(tzinfo=DEFAULT_TIMEZONE)
        return value

    @property
    def key(self) -> tuple[str, datetime]:
        """Identity used for deduplication: exact title + exact instant."""
        return self.title, self.start

    @property
    def start_iso(self) -> str:
        """Start as ISO-8601 in UTC (the persisted snapshot format)."""
        return self.start.astimezone(timezone.utc).isoformat()

    @property
    def snapshot_key(self) -> tuple[str, str]:
        return self.title, self.start_iso


class SnapshotEntry(BaseModel):
    """One (title, start) pair of a previous run's output."""

    title: str
    start: str

    @classmethod
    def from_event(cls, event: Event) -> "SnapshotEntry":
        return cls(title=event.title, start=event.start_iso)

    @property
    def key(self) -> tuple[str, str]:
        return self.title, self.start
