"""Snapshot of the previous run's output, used to find newly added events."""

import json
from pathlib import Path
from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError
from rich.console import Console

from acting_calendar.models import Event, SnapshotEntry

console = Console()

SNAPSHOT_FILE = Path("data") / "previous-events.json"

_ENTRIES = TypeAdapter(list[SnapshotEntry])


class Snapshot:
    """The (title, ISO start) pairs of a run's output."""

    def __init__(self, entries: Optional[Iterable[SnapshotEntry]] = None):
        self.entries: list[SnapshotEntry] = list(entries or [])
        self._keys = {entry.key for entry in self.entries}

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "Snapshot":
        return cls(SnapshotEntry.from_event(event) for event in events)

    def __contains__(self, event: Event) -> bool:
        return event.snapshot_key in self._keys

    def __len__(self) -> int:
        return len(self.entries)


def find_new_events(events: Iterable[Event], snapshot: Snapshot) -> list[Event]:
    """Events whose (title, ISO start) pair is not in the snapshot."""
    return [event for event in events if event not in snapshot]


class SnapshotStore:
    """JSON file holding the last run's snapshot; overwritten every run."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else SNAPSHOT_FILE

    def load(self) -> Snapshot:
        """Read the snapshot; absent or unreadable files give an empty one."""
        if not self.path.exists():
            console.print(f"[dim]No snapshot at {self.path}, treating every event as new[/dim]")
            return Snapshot()

        try:
            with open(self.path, encoding="utf-8") as f:
                entries = _ENTRIES.validate_python(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            console.print(f"[yellow]Ignoring unreadable snapshot {self.path}: {e}[/yellow]")
            return Snapshot()

        console.print(f"[dim]Loaded {len(entries)} events from snapshot[/dim]")
        return Snapshot(entries)

    def save(self, events: Iterable[Event]) -> Snapshot:
        """Replace the stored snapshot with the given events."""
        snapshot = Snapshot.from_events(events)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([entry.model_dump() for entry in snapshot.entries], f, indent=2)
        return snapshot
