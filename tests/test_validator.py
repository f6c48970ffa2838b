"""Tests for request origin and freshness verification."""

from datetime import datetime, timedelta, timezone

import pytest

from skill_dispatch.errors import (
    IdentityMismatchError,
    MalformedTimestampError,
    StaleOrFutureRequestError,
)
from skill_dispatch.models.request import RequestEnvelope
from skill_dispatch.services.validator import RequestValidator, parse_timestamp

from conftest import make_envelope

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _envelope_at(offset_seconds: float, application_id: str = "app-1") -> RequestEnvelope:
    timestamp = (NOW + timedelta(seconds=offset_seconds)).isoformat().replace("+00:00", "Z")
    return RequestEnvelope.model_validate(
        make_envelope(timestamp=timestamp, application_id=application_id)
    )


def test_empty_application_id_is_rejected() -> None:
    """Test configured identity with an empty request application ID fails."""
    validator = RequestValidator(application_id="app-1", ignore_timestamp=True)

    with pytest.raises(IdentityMismatchError):
        validator.validate(_envelope_at(0, application_id=""))


def test_different_application_id_is_rejected() -> None:
    validator = RequestValidator(application_id="app-1", ignore_timestamp=True)

    with pytest.raises(IdentityMismatchError):
        validator.validate(_envelope_at(0, application_id="app-2"))


def test_application_id_check_skipped_when_not_configured() -> None:
    validator = RequestValidator(application_id=None, ignore_timestamp=True)

    validator.validate(_envelope_at(0, application_id=""))


def test_application_id_from_context_when_no_session() -> None:
    """Test AudioPlayer requests without a session use the context application ID."""
    raw = make_envelope("AudioPlayer.PlaybackStarted", application_id="app-1")
    del raw["session"]
    validator = RequestValidator(application_id="app-1", ignore_timestamp=True)

    validator.validate(RequestEnvelope.model_validate(raw))


@pytest.mark.parametrize("offset", [-149, 0, 149, -150, 150])
def test_timestamp_within_tolerance_passes(offset: int) -> None:
    validator = RequestValidator(timestamp_tolerance=150)

    validator.verify_timestamp(_envelope_at(offset), now=NOW)


@pytest.mark.parametrize("offset", [-151, 151, -150.5, 3600])
def test_timestamp_outside_tolerance_fails(offset: float) -> None:
    validator = RequestValidator(timestamp_tolerance=150)

    with pytest.raises(StaleOrFutureRequestError):
        validator.verify_timestamp(_envelope_at(offset), now=NOW)


def test_custom_tolerance() -> None:
    validator = RequestValidator(timestamp_tolerance=10)

    validator.verify_timestamp(_envelope_at(-10), now=NOW)
    with pytest.raises(StaleOrFutureRequestError):
        validator.verify_timestamp(_envelope_at(-11), now=NOW)


def test_timestamp_check_can_be_disabled() -> None:
    validator = RequestValidator(ignore_timestamp=True)

    validator.verify_timestamp(_envelope_at(-86400), now=NOW)


@pytest.mark.parametrize(
    "value",
    ["", "yesterday", "2024-01-15", "2024-01-15T12:00:00", "1705320000", "20240115T120000Z", "2024-01-15T12:00Z"],
)
def test_malformed_timestamp(value: str) -> None:
    validator = RequestValidator()
    envelope = RequestEnvelope.model_validate(make_envelope(timestamp=value))

    with pytest.raises(MalformedTimestampError):
        validator.verify_timestamp(envelope, now=NOW)


def test_parse_timestamp_accepts_offsets_and_fractions() -> None:
    assert parse_timestamp("2024-01-15T12:00:00Z") == NOW
    assert parse_timestamp("2024-01-15T13:00:00+01:00") == NOW
    assert parse_timestamp("2024-01-15T12:00:00.250Z") == NOW + timedelta(milliseconds=250)


def test_identity_checked_before_timestamp() -> None:
    """Test a request failing both checks reports the identity failure."""
    validator = RequestValidator(application_id="app-1")

    with pytest.raises(IdentityMismatchError):
        validator.validate(_envelope_at(-1000, application_id="other"), now=NOW)
