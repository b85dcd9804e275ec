"""Tests for the calendar feed, status page and email digest."""

import smtplib
from datetime import timedelta
from pathlib import Path

import pytest

from acting_calendar.config import Settings
from acting_calendar.pipeline import PipelineResult
from acting_calendar.publishers import (
    build_calendar,
    render_status_page,
    send_digest,
    write_calendar,
)
from acting_calendar.publishers import digest


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.email_enabled is False
        assert settings.smtp_port == 587
        assert settings.output_dir == Path("public")
        assert settings.timezone == "Europe/London"

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), ("YES", True), ("false", False), ("", False),
    ])
    def test_email_flag(self, value, expected):
        assert Settings.from_env({"EMAIL_NOTIFICATIONS": value}).email_enabled is expected

    def test_overrides(self):
        settings = Settings.from_env({
            "SMTP_HOST": "smtp.example.com",
            "SMTP_PORT": "2525",
            "EMAIL_TO": "me@example.com",
            "URL": "https://acting-events.netlify.app/",
        })
        assert settings.smtp_host == "smtp.example.com"
        assert settings.smtp_port == 2525
        assert settings.email_to == "me@example.com"
        assert settings.site_host == "acting-events.netlify.app"


class TestCalendar:
    """Tests for the iCalendar feed."""

    def test_feed_metadata_and_events(self, sample_event, tmp_path):
        settings = Settings(output_dir=tmp_path)
        path = write_calendar([sample_event], settings)
        text = path.read_text(encoding="utf-8")

        assert "X-WR-CALNAME:London Acting Industry Events" in text
        assert "X-WR-TIMEZONE:Europe/London" in text
        assert "SUMMARY:Panel Talk" in text
        assert "Source: Eventbrite" in text
        assert text.count("BEGIN:VEVENT") == 1

    def test_one_entry_per_event(self, event_factory, now):
        events = [event_factory(f"Workshop {i}", start=now + timedelta(days=i)) for i in range(1, 4)]
        calendar = build_calendar(events, Settings())
        assert len(calendar.events) == 3

    def test_inverted_range_still_published(self, event_factory, now):
        start = now + timedelta(days=1)
        event = event_factory("Odd", start=start, end=start - timedelta(hours=1))
        calendar = build_calendar([event], Settings())
        assert len(calendar.events) == 1


def result_with(events, new_events, now) -> PipelineResult:
    return PipelineResult(
        events=events,
        new_events=new_events,
        source_counts={"Manual": 1, "Eventbrite": len(events) - 1, "Meetup": 0},
        generated_at=now,
    )


class TestStatusPage:
    """Tests for the HTML status page."""

    def test_counts_sources_and_subscribe_link(self, event_factory, now):
        events = [event_factory("A & B Showcase"), event_factory("Other", start=now + timedelta(days=3))]
        html = render_status_page(result_with(events, events[:1], now), Settings(site_url="https://cal.example"))

        assert "A &amp; B Showcase" in html
        assert "webcal://cal.example/calendar.ics" in html
        assert "Eventbrite: 1 event" in html
        assert "Meetup: 0 events" in html

    def test_new_events_capped_with_more_note(self, event_factory, now):
        new = [event_factory(f"New {i}", start=now + timedelta(days=i)) for i in range(1, 9)]
        html = render_status_page(result_with(new, new, now), Settings())

        assert "New 5" in html
        assert "New 6" not in html
        assert "+3 more" in html

    def test_no_new_events(self, event_factory, now):
        html = render_status_page(result_with([event_factory()], [], now), Settings())
        assert "No new events since the last update." in html


class FakeSMTP:
    """Stand-in for smtplib.SMTP recording what was sent."""

    sent: list = []
    fail = False

    def __init__(self, host, port):
        self.host, self.port = host, port

    def __enter__(self):
        if FakeSMTP.fail:
            raise smtplib.SMTPConnectError(421, "unavailable")
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, msg):
        FakeSMTP.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail = False
    monkeypatch.setattr(digest.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


class TestEmailDigest:
    """Tests for the new-events email."""

    SETTINGS = Settings(email_enabled=True, email_to="me@example.com", smtp_user="user")

    def test_sends_when_enabled(self, fake_smtp, sample_event):
        assert send_digest([sample_event], self.SETTINGS) is True
        assert len(fake_smtp.sent) == 1
        msg = fake_smtp.sent[0]
        assert msg["To"] == "me@example.com"
        body = msg.get_payload()[0].get_payload(decode=True).decode("utf-8")
        assert "Panel Talk" in body
        assert "https://www.eventbrite.co.uk/e/panel-talk-123" in body

    @pytest.mark.parametrize("settings,events", [
        (Settings(email_enabled=False, email_to="me@example.com"), "one"),
        (Settings(email_enabled=True, email_to="me@example.com"), "none"),
        (Settings(email_enabled=True, email_to=""), "one"),
    ])
    def test_skipped(self, fake_smtp, sample_event, settings, events):
        new_events = [sample_event] if events == "one" else []
        assert send_digest(new_events, settings) is False
        assert fake_smtp.sent == []

    def test_failure_is_not_raised(self, fake_smtp, sample_event):
        fake_smtp.fail = True
        assert send_digest([sample_event], self.SETTINGS) is False
