"""Main pipeline orchestration."""

import asyncio
from datetime import datetime
from typing import Iterable, Optional

import httpx
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from acting_calendar.extractors import create_client
from acting_calendar.models import Event
from acting_calendar.snapshot import Snapshot, find_new_events
from acting_calendar.sources import MANUAL_EVENTS, MANUAL_SOURCE, PROVIDERS, Provider, collect_provider

console = Console()


class PipelineResult(BaseModel):
    """Output of one pipeline run."""

    events: list[Event]
    new_events: list[Event]
    source_counts: dict[str, int] = Field(default_factory=dict)  # Retained events per source
    generated_at: datetime


async def collect_all(
    providers: list[Provider],
    now: datetime,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, list[Event]]:
    """Run every provider concurrently and wait for all of them.

    A provider that raises contributes zero events.
    """
    own_client = client is None
    client = client or create_client()

    try:
        results = await asyncio.gather(
            *[collect_provider(p, client, now) for p in providers],
            return_exceptions=True,
        )
    finally:
        if own_client:
            await client.aclose()

    collected: dict[str, list[Event]] = {}
    for provider, result in zip(providers, results):
        if isinstance(result, Exception):
            console.print(f"[yellow]Source {provider.name} failed: {result}[/yellow]")
            collected[provider.name] = []
        else:
            collected[provider.name] = result

    return collected


def aggregate(manual: Iterable[Event], collected: dict[str, list[Event]]) -> list[Event]:
    """Manual events first, then each provider's events in provider order."""
    events = list(manual)
    for provider_events in collected.values():
        events.extend(provider_events)
    return events


def filter_and_dedupe(events: Iterable[Event], now: datetime) -> list[Event]:
    """Keep future events, first occurrence per (title, start), sorted by start."""
    seen: set = set()
    kept: list[Event] = []

    for event in events:
        if event.start <= now:
            continue
        if event.key in seen:
            continue
        seen.add(event.key)
        kept.append(event)

    # sorted() is stable: ties keep their aggregation order
    return sorted(kept, key=lambda e: e.start)


def warn_inverted_ranges(events: Iterable[Event]) -> None:
    """Report events whose end precedes their start; they are kept as-is."""
    for event in events:
        if event.end < event.start:
            console.print(
                f"[yellow]Data quality: '{event.title[:50]}' ({event.source}) ends before it starts[/yellow]"
            )


def count_by_source(events: Iterable[Event]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for event in events:
        counts[event.source] = counts.get(event.source, 0) + 1
    return counts


async def run_pipeline(
    now: datetime,
    snapshot: Snapshot,
    providers: Optional[list[Provider]] = None,
    manual: Optional[list[Event]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> PipelineResult:
    """Run the full event pipeline.

    1. Fetch and extract every provider (concurrently)
    2. Aggregate with the manual events
    3. Drop past events and duplicates, sort by start
    4. Compare against the previous snapshot

    Nothing is written; persisting the snapshot is up to the caller.
    """
    providers = PROVIDERS if providers is None else providers
    manual = MANUAL_EVENTS if manual is None else manual

    console.print("\n[bold cyan]Starting events pipeline[/bold cyan]\n")

    collected = await collect_all(providers, now, client=client)
    raw_count = sum(len(v) for v in collected.values())
    console.print(f"[dim]Raw events: {len(manual)} manual + {raw_count} scraped[/dim]")

    events = filter_and_dedupe(aggregate(manual, collected), now)
    warn_inverted_ranges(events)
    new_events = find_new_events(events, snapshot)

    console.print(
        f"[green]Pipeline complete: {len(events)} upcoming events, {len(new_events)} new[/green]\n"
    )

    source_counts = {MANUAL_SOURCE: 0, **{p.name: 0 for p in providers}}
    source_counts.update(count_by_source(events))

    return PipelineResult(
        events=events,
        new_events=new_events,
        source_counts=source_counts,
        generated_at=now,
    )


def print_event_summary(events: list[Event], title: str = "Upcoming events", limit: int = 20) -> None:
    """Print a summary table of events."""
    table = Table(title=f"{title} (showing {min(len(events), limit)} of {len(events)})")
    table.add_column("Date", style="yellow")
    table.add_column("Title", style="cyan", max_width=40)
    table.add_column("Location", style="green", max_width=30)
    table.add_column("Source", style="magenta")

    for event in events[:limit]:
        table.add_row(
            event.start.strftime("%a %d %b %Y %H:%M"),
            event.title[:40],
            event.location[:30],
            event.source,
        )

    console.print(table)


def print_stats(result: PipelineResult) -> None:
    """Print statistics about a pipeline run."""
    console.print("\n[bold]Statistics[/bold]")
    console.print(f"  Upcoming events: {len(result.events)}")
    console.print(f"  New since last run: {len(result.new_events)}")
    console.print(f"  By source: {result.source_counts}")
