"""CLI for the London acting events calendar."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from acting_calendar.config import Settings
from acting_calendar.pipeline import print_event_summary, print_stats, run_pipeline
from acting_calendar.publishers import send_digest, write_calendar, write_status_page
from acting_calendar.snapshot import SnapshotStore
from acting_calendar.sources import MANUAL_EVENTS, PROVIDERS, load_manual_events

# Load environment variables (override=True to beat shell env vars)
load_dotenv(override=True)

app = typer.Typer(
    name="acting-calendar",
    help="London acting industry events calendar builder",
    add_completion=False,
)
console = Console()


def manual_events(manual_file: Optional[Path]):
    """Built-in curated events plus any loaded from a JSON file."""
    if manual_file is None:
        return list(MANUAL_EVENTS)
    try:
        return list(MANUAL_EVENTS) + load_manual_events(manual_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error reading {manual_file}: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def build(
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o",
        help="Where to write calendar.ics and index.html (default: OUTPUT_DIR env var)",
    ),
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", "-s",
        help="Snapshot file of the previous run (default: SNAPSHOT_PATH env var)",
    ),
    manual_file: Optional[Path] = typer.Option(None, "--manual-file", "-m", help="Extra curated events (JSON)"),
    email: bool = typer.Option(True, "--email/--no-email", help="Send the digest if enabled in config"),
    show_summary: bool = typer.Option(True, "--summary/--no-summary", help="Show summary table"),
):
    """Fetch events and publish the calendar feed and status page."""
    settings = Settings.from_env()
    if output_dir:
        settings.output_dir = output_dir
    if snapshot:
        settings.snapshot_path = snapshot

    store = SnapshotStore(settings.snapshot_path)
    manual = manual_events(manual_file)
    now = datetime.now(timezone.utc)

    result = asyncio.run(run_pipeline(now, store.load(), manual=manual))

    try:
        write_calendar(result.events, settings)
        write_status_page(result, settings)
        store.save(result.events)
    except OSError as e:
        console.print(f"[red]Error writing output: {e}[/red]")
        raise typer.Exit(1)

    if email:
        send_digest(result.new_events, settings)

    if show_summary:
        print_event_summary(result.events)
        print_stats(result)

    console.print(f"\n[bold green]Calendar generated![/bold green] {len(result.events)} events")


@app.command()
def preview(
    limit: int = typer.Option(20, "--limit", "-l", help="Max rows per table"),
    manual_file: Optional[Path] = typer.Option(None, "--manual-file", "-m", help="Extra curated events (JSON)"),
):
    """Run the pipeline and show the result without writing anything."""
    settings = Settings.from_env()
    snapshot = SnapshotStore(settings.snapshot_path).load()
    now = datetime.now(timezone.utc)

    result = asyncio.run(run_pipeline(now, snapshot, manual=manual_events(manual_file)))

    print_event_summary(result.events, limit=limit)
    if result.new_events:
        print_event_summary(result.new_events, title="New since last run", limit=limit)
    print_stats(result)


@app.command()
def sources():
    """List registered event providers."""
    table = Table(title="Event providers")
    table.add_column("Name", style="cyan")
    table.add_column("Strategy", style="green")
    table.add_column("Delay (s)", justify="right")
    table.add_column("Pages", justify="right")

    for provider in PROVIDERS:
        table.add_row(provider.name, provider.strategy, f"{provider.delay:.1f}", str(len(provider.urls)))

    console.print(table)
    console.print(f"[dim]+ {len(MANUAL_EVENTS)} built-in manual events[/dim]")


if __name__ == "__main__":
    app()
