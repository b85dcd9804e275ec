"""Email digest of newly added events."""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from rich.console import Console

from acting_calendar.config import Settings
from acting_calendar.models import Event
from acting_calendar.normalizers import LONDON

console = Console()


def format_subject(new_events: list[Event]) -> str:
    count = len(new_events)
    return f"🎭 {count} new London acting event{'s' if count != 1 else ''}"


def render_text_email(new_events: list[Event]) -> str:
    lines = [f"{len(new_events)} new events were added to the London Acting Events Calendar:", ""]
    for event in new_events:
        start = event.start.astimezone(LONDON)
        lines += [
            event.title,
            f"  Date: {start.strftime('%A %d %B %Y')}",
            f"  Time: {start.strftime('%H:%M')}",
            f"  Location: {event.location}",
        ]
        if event.url:
            lines.append(f"  Link: {event.url}")
        lines.append("")
    return "\n".join(lines)


def render_html_email(new_events: list[Event]) -> str:
    rows = []
    for event in new_events:
        start = event.start.astimezone(LONDON)
        link = f'<br><a href="{escape(event.url)}">More info</a>' if event.url else ""
        rows.append(
            f"<li><strong>{escape(event.title)}</strong><br>"
            f"📅 {start.strftime('%A %d %B %Y')} · 🕐 {start.strftime('%H:%M')}<br>"
            f"📍 {escape(event.location)}{link}</li>"
        )
    return (
        f"<h2>{len(new_events)} new London acting events</h2>\n"
        "<ul>\n" + "\n".join(rows) + "\n</ul>"
    )


def send_digest(new_events: list[Event], settings: Settings) -> bool:
    """Email the new events. Returns True if a message was sent.

    Skipped when notifications are disabled, there is nothing new, or no
    recipient is configured. Delivery failures are reported, never raised.
    """
    if not settings.email_enabled:
        console.print("[dim]Email notifications disabled[/dim]")
        return False
    if not new_events:
        console.print("[dim]No new events, skipping email[/dim]")
        return False
    if not settings.email_to:
        console.print("[yellow]EMAIL_TO not set, skipping email[/yellow]")
        return False

    msg = MIMEMultipart("alternative")
    msg["Subject"] = format_subject(new_events)
    msg["From"] = settings.email_from
    msg["To"] = settings.email_to
    msg.attach(MIMEText(render_text_email(new_events), "plain", "utf-8"))
    msg.attach(MIMEText(render_html_email(new_events), "html", "utf-8"))

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
            if settings.smtp_user:
                server.starttls()
                server.login(settings.smtp_user, settings.smtp_password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        console.print(f"[yellow]Failed to send email digest: {e}[/yellow]")
        return False

    console.print(f"[green]Emailed {len(new_events)} new events to {settings.email_to}[/green]")
    return True
