"""Request dispatch runtime for Alexa skills."""

from .errors import (
    IdentityMismatchError,
    InvalidDirectiveError,
    MalformedTimestampError,
    PersistenceError,
    RequestVerificationError,
    SkillError,
    StaleOrFutureRequestError,
)
from .models import RequestEnvelope, ResponseEnvelope
from .services import (
    ErrorHandler,
    HandlerInput,
    RequestHandler,
    RequestInterceptor,
    ResponseBuilder,
    ResponseInterceptor,
    Skill,
    SkillConfiguration,
    build_default_skill,
)

__all__ = [
    "Skill",
    "SkillConfiguration",
    "HandlerInput",
    "RequestHandler",
    "RequestInterceptor",
    "ResponseInterceptor",
    "ErrorHandler",
    "ResponseBuilder",
    "RequestEnvelope",
    "ResponseEnvelope",
    "build_default_skill",
    "SkillError",
    "RequestVerificationError",
    "IdentityMismatchError",
    "MalformedTimestampError",
    "StaleOrFutureRequestError",
    "InvalidDirectiveError",
    "PersistenceError",
]
