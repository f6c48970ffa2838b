"""Capability predicates for use in ``can_handle``."""

from collections.abc import Callable

from ..models.request import RequestType
from .pipeline import HandlerInput

Predicate = Callable[[HandlerInput], bool]


def is_request_type(*request_types: str) -> Predicate:
    """Match requests whose ``request.type`` is one of the given names."""
    return lambda handler_input: handler_input.request_type in request_types


def is_intent_name(*intent_names: str) -> Predicate:
    """Match IntentRequests for any of the given intent names."""

    def predicate(handler_input: HandlerInput) -> bool:
        return (
            handler_input.request_type == RequestType.INTENT
            and handler_input.intent_name in intent_names
        )

    return predicate
