"""Tests for the replay CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from skill_dispatch.cli import app

from conftest import intent_envelope, make_envelope

runner = CliRunner()


def _write(tmp_path: Path, envelope: dict) -> Path:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(envelope))
    return path


def test_replay_old_request_ignores_timestamp(tmp_path: Path) -> None:
    path = _write(tmp_path, make_envelope("SessionEndedRequest", timestamp="2020-01-01T00:00:00Z"))

    result = runner.invoke(app, ["replay", str(path)])

    assert result.exit_code == 0
    assert '"shouldEndSession": true' in result.stdout


def test_replay_with_timestamp_check_fails(tmp_path: Path) -> None:
    path = _write(tmp_path, make_envelope("SessionEndedRequest", timestamp="2020-01-01T00:00:00Z"))

    result = runner.invoke(app, ["replay", str(path), "--check-timestamp"])

    assert result.exit_code == 1
    assert "Unhandled error" in result.stdout


def test_replay_without_matching_handler(tmp_path: Path) -> None:
    path = _write(tmp_path, make_envelope("LaunchRequest"))

    result = runner.invoke(app, ["replay", str(path)])

    assert result.exit_code == 0
    assert "No handler matched" in result.stdout


def test_replay_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["replay", str(tmp_path / "missing.json")])

    assert result.exit_code == 1


def test_inspect_slots(tmp_path: Path) -> None:
    slots = {
        "color": {
            "name": "color",
            "value": "plaid",
            "resolutions": {"resolutionsPerAuthority": [{"status": {"code": "ER_SUCCESS_NO_MATCH"}}]},
        },
        "phrase": {"name": "phrase", "value": "hello"},
    }
    path = _write(tmp_path, intent_envelope("ColorIntent", slots=slots))

    result = runner.invoke(app, ["inspect-slots", str(path)])

    assert result.exit_code == 0
    assert "not_found" in result.stdout
    assert "unverified" in result.stdout
