"""Static status page: subscribe links, counts, sources and what's new."""

from html import escape
from pathlib import Path

from rich.console import Console

from acting_calendar.config import Settings
from acting_calendar.models import Event
from acting_calendar.normalizers import LONDON
from acting_calendar.pipeline import PipelineResult
from acting_calendar.publishers.calendar import CALENDAR_FILE

console = Console()

STATUS_FILE = "index.html"
MAX_NEW_SHOWN = 5

PAGE_STYLE = """
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
               max-width: 800px; margin: 50px auto; padding: 20px; background: #f0f2f8; }
        .container { background: white; padding: 40px; border-radius: 12px; }
        .button { display: inline-block; background: #667eea; color: white; padding: 15px 30px;
                  text-decoration: none; border-radius: 8px; font-weight: 600; margin: 10px 10px 10px 0; }
        .box { background: #f7fafc; padding: 20px; border-radius: 8px; margin: 20px 0;
               border-left: 4px solid #667eea; }
        .url-box { background: #edf2f7; padding: 15px; border-radius: 6px; font-family: monospace;
                   word-break: break-all; }
        .stats { display: flex; gap: 20px; }
        .stat { font-size: 28px; font-weight: 700; color: #333; }
        .more { color: #888; font-style: italic; }
        .last-updated { color: #888; font-size: 14px; margin-top: 30px; text-align: center; }
"""


def format_when(event: Event) -> str:
    return event.start.astimezone(LONDON).strftime("%a %d %b %Y, %H:%M")


def render_new_events(new_events: list[Event]) -> str:
    """List the first few new events, then a "+N more" note."""
    if not new_events:
        return "<p>No new events since the last update.</p>"

    items = []
    for event in new_events[:MAX_NEW_SHOWN]:
        title = escape(event.title)
        if event.url:
            title = f'<a href="{escape(event.url)}">{title}</a>'
        items.append(
            f"<li><strong>{title}</strong><br>{escape(format_when(event))} · "
            f"{escape(event.location)} <em>({escape(event.source)})</em></li>"
        )

    html = "<ul>\n" + "\n".join(items) + "\n</ul>"
    remaining = len(new_events) - MAX_NEW_SHOWN
    if remaining > 0:
        html += f'\n<p class="more">+{remaining} more</p>'
    return html


def render_sources(source_counts: dict[str, int]) -> str:
    items = [
        f"<li>{escape(name)}: {count} event{'s' if count != 1 else ''}</li>"
        for name, count in source_counts.items()
    ]
    return "<ul>\n" + "\n".join(items) + "\n</ul>"


def render_status_page(result: PipelineResult, settings: Settings) -> str:
    """Render the full HTML document for a pipeline run."""
    webcal = f"webcal://{escape(settings.site_host)}/{CALENDAR_FILE}"
    updated = result.generated_at.astimezone(LONDON).strftime("%d/%m/%Y, %H:%M:%S")
    active_sources = sum(1 for count in result.source_counts.values() if count > 0)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>London Acting Events Calendar</title>
    <style>{PAGE_STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>🎭 London Acting Events Calendar</h1>
        <p>Automatically updated calendar of industry events, workshops, and networking opportunities</p>

        <a href="{CALENDAR_FILE}" class="button" download>📥 Download Calendar</a>
        <a href="{webcal}" class="button">📆 Subscribe in Calendar App</a>

        <div class="stats">
            <div><div class="stat">{len(result.events)}</div>upcoming events</div>
            <div><div class="stat">{len(result.new_events)}</div>new since last update</div>
            <div><div class="stat">{active_sources}</div>active sources</div>
        </div>

        <div class="box">
            <h2>✨ Newly Added</h2>
            {render_new_events(result.new_events)}
        </div>

        <div class="box">
            <h2>📍 Event Sources</h2>
            {render_sources(result.source_counts)}
        </div>

        <div class="box">
            <h2>How to Subscribe (Auto-Updates)</h2>
            <p><strong>Copy this URL into your calendar app:</strong></p>
            <div class="url-box">{webcal}</div>
        </div>

        <p class="last-updated">Last updated: {updated} | Updates daily at midnight GMT</p>
    </div>
</body>
</html>
"""


def write_status_page(result: PipelineResult, settings: Settings) -> Path:
    """Write ``<output_dir>/index.html``."""
    settings.output_dir.mkdir(parents=True, exist_ok=True)
    path = settings.output_dir / STATUS_FILE
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_status_page(result, settings))

    console.print(f"[dim]Wrote {path}[/dim]")
    return path
