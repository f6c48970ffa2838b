"""Request origin and freshness verification."""

import logging
import re
from datetime import datetime, timezone

from ..errors import IdentityMismatchError, MalformedTimestampError, StaleOrFutureRequestError
from ..models.request import RequestEnvelope

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_TOLERANCE = 150.0

RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 request timestamp.

    Alexa sends UTC timestamps like ``2024-01-15T10:20:30Z``. Offsets are
    accepted too; a timestamp without any offset is rejected.

    Raises:
        MalformedTimestampError: if the value is not an RFC 3339 date-time
    """
    text = value.strip()
    if not RFC3339_PATTERN.match(text):
        raise MalformedTimestampError(f"Unable to parse request timestamp {value!r}: not RFC 3339")

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise MalformedTimestampError(f"Unable to parse request timestamp {value!r}: {e}") from e

    return parsed


class RequestValidator:
    """
    Gate that checks where a request came from and when it was sent.

    Args:
        application_id: Expected skill application ID; None or empty skips the check
        timestamp_tolerance: Maximum allowed skew in seconds
        ignore_timestamp: Skip the freshness check (replaying captured requests)
    """

    def __init__(
        self,
        application_id: str | None = None,
        timestamp_tolerance: float | None = DEFAULT_TIMESTAMP_TOLERANCE,
        ignore_timestamp: bool = False,
    ) -> None:
        self.application_id = application_id or None
        self.timestamp_tolerance = (
            DEFAULT_TIMESTAMP_TOLERANCE if timestamp_tolerance is None else timestamp_tolerance
        )
        self.ignore_timestamp = ignore_timestamp

    def validate(self, envelope: RequestEnvelope, now: datetime | None = None) -> None:
        """Run the identity check, then the freshness check."""
        self.verify_application_id(envelope)
        self.verify_timestamp(envelope, now=now)

    def verify_application_id(self, envelope: RequestEnvelope) -> None:
        """Verify the request's application ID matches the configured one."""
        if self.application_id is None:
            logger.info("Ignoring application verification.")
            return

        request_app_id = envelope.application_id
        if not request_app_id:
            raise IdentityMismatchError("Request application ID was set to an empty string")
        if request_app_id != self.application_id:
            raise IdentityMismatchError(
                f"Request application ID {request_app_id!r} does not match expected application ID"
            )

    def verify_timestamp(self, envelope: RequestEnvelope, now: datetime | None = None) -> None:
        """Verify the request timestamp is within the tolerance window of now."""
        if self.ignore_timestamp:
            logger.info("Ignoring timestamp verification.")
            return

        timestamp = parse_timestamp(envelope.request.timestamp)
        current = now or datetime.now(timezone.utc)
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)

        delta = abs((current - timestamp).total_seconds())
        if delta > self.timestamp_tolerance:
            raise StaleOrFutureRequestError(
                f"Invalid timestamp. The request timestamp {timestamp.isoformat()} was off "
                f"the current time {current.isoformat()} by more than "
                f"{self.timestamp_tolerance:g} seconds."
            )
