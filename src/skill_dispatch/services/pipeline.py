"""Request dispatch pipeline.

A request goes through:

1. Validation (application ID, then timestamp)
2. Request interceptors, in registration order
3. The first handler whose ``can_handle`` returns True
4. Response interceptors, in registration order

A failure at any stage is passed to the first error handler that can handle
it. If none can, the original exception is raised to the caller.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ..config import Settings
from ..models.request import Request, RequestEnvelope
from ..models.response import ResponseEnvelope
from .response_builder import ResponseBuilder
from .validator import DEFAULT_TIMESTAMP_TOLERANCE, RequestValidator

logger = logging.getLogger(__name__)


class HandlerInput:
    """
    Per-request state shared by interceptors and handlers.

    Interceptors fill the attribute fields; handlers read them. A new
    instance (and response builder) is created for every request.
    """

    def __init__(
        self,
        request_envelope: RequestEnvelope,
        host_context: Any = None,
        now: datetime | None = None,
    ) -> None:
        self.request_envelope = request_envelope
        # Hosting environment context, e.g. the AWS Lambda context object
        self.host_context = host_context
        self.now = now

        self.session_attributes: dict[str, Any] | None = None
        self.skill_state: BaseModel | None = None
        self.persistent_attributes: dict[str, Any] | None = None

        self._response_builder: ResponseBuilder | None = None

    @property
    def request(self) -> Request:
        return self.request_envelope.request

    @property
    def request_type(self) -> str:
        return self.request_envelope.request.type

    @property
    def intent_name(self) -> str:
        return self.request_envelope.request.intent_name

    @property
    def response_builder(self) -> ResponseBuilder:
        if self._response_builder is None:
            self._response_builder = ResponseBuilder()
        return self._response_builder


class RequestInterceptor(ABC):
    """Runs before the handler; may attach derived state to the handler input."""

    @abstractmethod
    def process(self, handler_input: HandlerInput) -> None: ...


class ResponseInterceptor(ABC):
    """Runs after the handler; may inspect or update the response."""

    @abstractmethod
    def process(self, handler_input: HandlerInput, response: ResponseEnvelope | None) -> None: ...


class RequestHandler(ABC):
    """Handles the requests for which ``can_handle`` returns True."""

    @abstractmethod
    def can_handle(self, handler_input: HandlerInput) -> bool: ...

    @abstractmethod
    def handle(self, handler_input: HandlerInput) -> ResponseEnvelope | None: ...


class ErrorHandler(ABC):
    """Turns an error raised during processing into a response."""

    @abstractmethod
    def can_handle(self, handler_input: HandlerInput, error: Exception) -> bool: ...

    @abstractmethod
    def handle(self, handler_input: HandlerInput, error: Exception) -> ResponseEnvelope | None: ...


@dataclass
class SkillConfiguration:
    """
    Everything the pipeline needs, fixed at construction.

    Handlers and interceptors run in list order; when several handlers can
    handle a request, the one registered first wins.
    """

    application_id: str | None = None
    timestamp_tolerance: float = DEFAULT_TIMESTAMP_TOLERANCE
    ignore_timestamp: bool = False
    request_interceptors: list[RequestInterceptor] = field(default_factory=list)
    handlers: list[RequestHandler] = field(default_factory=list)
    response_interceptors: list[ResponseInterceptor] = field(default_factory=list)
    error_handlers: list[ErrorHandler] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings, **stages: Any) -> "SkillConfiguration":
        """Build a configuration from application settings plus stage lists."""
        return cls(
            application_id=settings.application_id or None,
            timestamp_tolerance=settings.timestamp_tolerance,
            ignore_timestamp=settings.ignore_timestamp,
            **stages,
        )


class Skill:
    """Dispatches request envelopes through a configured pipeline."""

    def __init__(self, configuration: SkillConfiguration) -> None:
        self.configuration = configuration
        self.validator = RequestValidator(
            application_id=configuration.application_id,
            timestamp_tolerance=configuration.timestamp_tolerance,
            ignore_timestamp=configuration.ignore_timestamp,
        )

    def invoke(
        self,
        envelope: RequestEnvelope,
        host_context: Any = None,
        now: datetime | None = None,
    ) -> ResponseEnvelope | None:
        """Process one request envelope with a fresh handler input."""
        return self.process(HandlerInput(envelope, host_context=host_context, now=now))

    def process(self, handler_input: HandlerInput) -> ResponseEnvelope | None:
        """
        Run the pipeline for one request.

        Returns:
            The response, or None if no handler could handle the request

        Raises:
            Exception: the original error when no error handler accepts it
        """
        config = self.configuration
        request = handler_input.request
        logger.debug(f"Dispatching {request.type} requestId={request.requestId}")

        try:
            self.validator.validate(handler_input.request_envelope, now=handler_input.now)

            for interceptor in config.request_interceptors:
                logger.debug(f"Request interceptor {type(interceptor).__name__}")
                interceptor.process(handler_input)

            response = None
            for handler in config.handlers:
                if handler.can_handle(handler_input):
                    logger.debug(f"Handling with {type(handler).__name__}")
                    response = handler.handle(handler_input)
                    break
            else:
                logger.info(f"No handler for {request.type} {handler_input.intent_name}".rstrip())

            for interceptor in config.response_interceptors:
                logger.debug(f"Response interceptor {type(interceptor).__name__}")
                interceptor.process(handler_input, response)

        except Exception as e:
            return self._dispatch_error(handler_input, e)

        return response

    def _dispatch_error(self, handler_input: HandlerInput, error: Exception) -> ResponseEnvelope | None:
        logger.warning(f"Error processing requestId={handler_input.request.requestId}: {error!r}")

        for handler in self.configuration.error_handlers:
            if handler.can_handle(handler_input, error):
                logger.debug(f"Error handled by {type(handler).__name__}")
                return handler.handle(handler_input, error)

        logger.error(f"Unhandled error: {error!r}")
        raise error
