"""Dispatch pipeline, response builder and supporting services."""

from .attributes import SessionAttributesLoader, SessionAttributesSaver
from .persistence import DynamoDbPersistenceAdapter, PersistentAttributesLoader, PersistentAttributesSaver
from .pipeline import (
    ErrorHandler,
    HandlerInput,
    RequestHandler,
    RequestInterceptor,
    ResponseInterceptor,
    Skill,
    SkillConfiguration,
)
from .predicates import is_intent_name, is_request_type
from .response_builder import ResponseBuilder, strip_ssml, wrap_ssml
from .slot_resolution import ResolutionStatus, is_valid_status, resolution_status, resolved_value
from .standard import (
    CatchAllErrorHandler,
    RequestLogger,
    ResponseLogger,
    SessionEndedRequestHandler,
    build_default_skill,
)
from .validator import RequestValidator

__all__ = [
    "Skill",
    "SkillConfiguration",
    "HandlerInput",
    "RequestHandler",
    "RequestInterceptor",
    "ResponseInterceptor",
    "ErrorHandler",
    "RequestValidator",
    "ResponseBuilder",
    "wrap_ssml",
    "strip_ssml",
    "ResolutionStatus",
    "resolution_status",
    "is_valid_status",
    "resolved_value",
    "is_request_type",
    "is_intent_name",
    "SessionAttributesLoader",
    "SessionAttributesSaver",
    "DynamoDbPersistenceAdapter",
    "PersistentAttributesLoader",
    "PersistentAttributesSaver",
    "RequestLogger",
    "ResponseLogger",
    "SessionEndedRequestHandler",
    "CatchAllErrorHandler",
    "build_default_skill",
]
