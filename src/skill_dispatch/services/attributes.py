"""Interceptors that carry session attributes across turns."""

import logging

from pydantic import BaseModel

from ..models.response import ResponseEnvelope
from .pipeline import HandlerInput, RequestInterceptor, ResponseInterceptor

logger = logging.getLogger(__name__)


class SessionAttributesLoader(RequestInterceptor):
    """
    Copy the inbound session attributes onto the handler input.

    When ``model`` is given, the attributes are also validated into that
    pydantic model and exposed as ``handler_input.skill_state``. Validation
    errors propagate to the error handlers.
    """

    def __init__(self, model: type[BaseModel] | None = None) -> None:
        self.model = model

    def process(self, handler_input: HandlerInput) -> None:
        session = handler_input.request_envelope.session
        attributes = dict(session.attributes) if session else {}

        handler_input.session_attributes = attributes
        if self.model is not None:
            handler_input.skill_state = self.model.model_validate(attributes)

        logger.debug(f"Loaded {len(attributes)} session attributes")


class SessionAttributesSaver(ResponseInterceptor):
    """Write session attributes into the response while the session continues."""

    def process(self, handler_input: HandlerInput, response: ResponseEnvelope | None) -> None:
        if response is None or response.response.shouldEndSession:
            return

        # Attributes set explicitly by the handler take precedence
        if response.sessionAttributes is not None:
            return

        if handler_input.skill_state is not None:
            response.sessionAttributes = handler_input.skill_state.model_dump(mode="json")
        elif handler_input.session_attributes is not None:
            response.sessionAttributes = dict(handler_input.session_attributes)
