"""Exception taxonomy for request dispatch."""


class SkillError(Exception):
    """Base class for errors raised by the dispatch runtime."""


class RequestVerificationError(SkillError):
    """The inbound envelope failed origin or freshness verification."""


class IdentityMismatchError(RequestVerificationError):
    """Application ID in the request is missing or does not match the configured one."""


class MalformedTimestampError(RequestVerificationError):
    """Request timestamp could not be parsed."""


class StaleOrFutureRequestError(RequestVerificationError):
    """Request timestamp is outside the tolerance window."""


class InvalidDirectiveError(SkillError, ValueError):
    """A directive was added without one of its required fields."""


class PersistenceError(SkillError):
    """Persistent attributes could not be read or written."""
