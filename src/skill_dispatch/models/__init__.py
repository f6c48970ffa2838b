"""Pydantic models for the Alexa request/response envelopes."""

from .display import (
    DisplayImageObject,
    DisplayImageSource,
    DisplayListItem,
    DisplayTemplate,
    DisplayTextContent,
    TextContent,
)
from .request import (
    BuiltinIntent,
    Context,
    Intent,
    IntentSlot,
    Request,
    RequestEnvelope,
    RequestType,
    Session,
)
from .response import (
    AudioItemMetadata,
    Card,
    Directive,
    OutputSpeech,
    Reprompt,
    ResponseBody,
    ResponseEnvelope,
    VideoAppLaunchDirective,
)

__all__ = [
    "RequestEnvelope",
    "Request",
    "RequestType",
    "BuiltinIntent",
    "Session",
    "Context",
    "Intent",
    "IntentSlot",
    "ResponseEnvelope",
    "ResponseBody",
    "OutputSpeech",
    "Reprompt",
    "Card",
    "Directive",
    "AudioItemMetadata",
    "VideoAppLaunchDirective",
    "DisplayTemplate",
    "DisplayImageObject",
    "DisplayImageSource",
    "DisplayListItem",
    "DisplayTextContent",
    "TextContent",
]
