"""Skill-agnostic handlers and interceptors, and the default skill."""

import logging

from ..config import Settings, settings as default_settings
from ..errors import RequestVerificationError
from ..models.request import RequestType
from ..models.response import ResponseEnvelope
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
from .predicates import is_request_type
from .response_builder import ResponseBuilder

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Sorry, I had trouble doing what you asked. Please try again."


class RequestLogger(RequestInterceptor):
    """Log every inbound request."""

    def process(self, handler_input: HandlerInput) -> None:
        request = handler_input.request
        logger.info(
            f"Request {request.type} requestId={request.requestId} "
            f"intent={handler_input.intent_name or '-'}"
        )
        logger.debug(f"Request envelope: {handler_input.request_envelope.model_dump_json()}")


class ResponseLogger(ResponseInterceptor):
    """Log every outbound response."""

    def process(self, handler_input: HandlerInput, response: ResponseEnvelope | None) -> None:
        if response is None:
            logger.info(f"No response for requestId={handler_input.request.requestId}")
            return
        logger.debug(f"Response envelope: {response.to_wire()}")


class SessionEndedRequestHandler(RequestHandler):
    """Acknowledge SessionEndedRequest; Alexa ignores any speech in the reply."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_request_type(RequestType.SESSION_ENDED)(handler_input)

    def handle(self, handler_input: HandlerInput) -> ResponseEnvelope:
        request = handler_input.request
        logger.info(f"Session ended: reason={request.reason or '-'}")
        if request.error is not None:
            logger.warning(f"Session ended with error {request.error.type}: {request.error.message}")

        return handler_input.response_builder.with_should_end_session(True).get_response()


class CatchAllErrorHandler(ErrorHandler):
    """Apologize for any error and keep the session open."""

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        passthrough: tuple[type[Exception], ...] = (),
    ) -> None:
        self.message = message
        # Error types left for the caller to handle
        self.passthrough = passthrough

    def can_handle(self, handler_input: HandlerInput, error: Exception) -> bool:
        return not isinstance(error, self.passthrough)

    def handle(self, handler_input: HandlerInput, error: Exception) -> ResponseEnvelope:
        logger.error(f"Handled error for requestId={handler_input.request.requestId}: {error}")

        # Fresh builder, the failed stage may have left a partial response
        return (
            ResponseBuilder()
            .speak(self.message)
            .reprompt(self.message)
            .with_should_end_session(False)
            .get_response()
        )


def build_default_skill(
    settings: Settings | None = None,
    handlers: list[RequestHandler] | None = None,
) -> Skill:
    """
    Build a skill with the generic stages wired in.

    Skill-specific handlers are placed ahead of the session-ended handler.
    Request verification errors are not caught so the caller can reject the
    request; every other error gets the catch-all apology.
    """
    settings = settings or default_settings

    request_interceptors: list[RequestInterceptor] = [RequestLogger(), SessionAttributesLoader()]
    response_interceptors: list[ResponseInterceptor] = [SessionAttributesSaver(), ResponseLogger()]

    if settings.persistence_table_name:
        adapter = DynamoDbPersistenceAdapter(
            table_name=settings.persistence_table_name,
            partition_key_name=settings.persistence_partition_key,
            attribute_name=settings.persistence_attribute_name,
            region=settings.aws_region,
        )
        request_interceptors.append(PersistentAttributesLoader(adapter))
        response_interceptors.insert(0, PersistentAttributesSaver(adapter))

    configuration = SkillConfiguration.from_settings(
        settings,
        request_interceptors=request_interceptors,
        handlers=[*(handlers or []), SessionEndedRequestHandler()],
        response_interceptors=response_interceptors,
        error_handlers=[CatchAllErrorHandler(passthrough=(RequestVerificationError,))],
    )
    return Skill(configuration)

