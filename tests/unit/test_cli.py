"""Tests for the command-line interface."""

import json
from datetime import timedelta

import pytest
from typer.testing import CliRunner

from acting_calendar import cli
from acting_calendar.pipeline import PipelineResult

runner = CliRunner()


@pytest.fixture
def fake_pipeline(monkeypatch, event_factory, now):
    """Replace the network-bound pipeline with a canned result."""
    events = [event_factory("Scratch Night", start=now + timedelta(days=2))]
    seen = {}

    async def fake_run_pipeline(run_now, snapshot, manual=None, **kwargs):
        seen["snapshot"] = snapshot
        seen["manual"] = manual
        return PipelineResult(
            events=events,
            new_events=events,
            source_counts={"Manual": 1},
            generated_at=now,
        )

    monkeypatch.setattr(cli, "run_pipeline", fake_run_pipeline)
    return seen


class TestBuild:
    """Tests for the build command."""

    def test_writes_outputs_and_snapshot(self, tmp_path, fake_pipeline):
        out = tmp_path / "public"
        snapshot = tmp_path / "data" / "previous-events.json"

        result = runner.invoke(
            cli.app,
            ["build", "--output-dir", str(out), "--snapshot", str(snapshot), "--no-email", "--no-summary"],
        )

        assert result.exit_code == 0, result.output
        assert (out / "calendar.ics").exists()
        assert (out / "index.html").exists()
        assert [entry["title"] for entry in json.loads(snapshot.read_text())] == ["Scratch Night"]

    def test_previous_snapshot_feeds_pipeline(self, tmp_path, fake_pipeline):
        snapshot = tmp_path / "previous-events.json"
        snapshot.write_text(json.dumps([{"title": "Earlier", "start": "2026-10-01T18:00:00+00:00"}]))

        result = runner.invoke(
            cli.app,
            ["build", "-o", str(tmp_path / "out"), "-s", str(snapshot), "--no-email", "--no-summary"],
        )

        assert result.exit_code == 0, result.output
        assert [entry.title for entry in fake_pipeline["snapshot"].entries] == ["Earlier"]
        assert [entry["title"] for entry in json.loads(snapshot.read_text())] == ["Scratch Night"]

    def test_write_failure_exits_non_zero(self, tmp_path, fake_pipeline):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        result = runner.invoke(
            cli.app,
            ["build", "--output-dir", str(blocker), "--snapshot", str(tmp_path / "s.json"), "--no-email"],
        )

        assert result.exit_code == 1

    def test_manual_file_is_loaded(self, tmp_path, fake_pipeline):
        manual = tmp_path / "manual.json"
        manual.write_text(json.dumps([
            {"title": "Showcase", "start": "2026-12-01T19:00:00", "location": "Soho Theatre"},
            {"title": "", "start": "2026-12-02T19:00:00"},
        ]))

        result = runner.invoke(
            cli.app,
            ["build", "-o", str(tmp_path / "out"), "-s", str(tmp_path / "s.json"),
             "-m", str(manual), "--no-email", "--no-summary"],
        )

        assert result.exit_code == 0, result.output
        titles = [e.title for e in fake_pipeline["manual"]]
        assert titles[-1] == "Showcase"
        assert "" not in titles

    def test_missing_manual_file(self, tmp_path, fake_pipeline):
        result = runner.invoke(cli.app, ["build", "-m", str(tmp_path / "nope.json"), "--no-email"])
        assert result.exit_code == 1


class TestSources:
    """Tests for the sources command."""

    def test_lists_providers(self):
        result = runner.invoke(cli.app, ["sources"])
        assert result.exit_code == 0
        assert "Eventbrite" in result.output
        assert "structured" in result.output
