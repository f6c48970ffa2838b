"""Shared fixtures: a test skill, the webhook client and envelope factories."""

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from skill_dispatch.config import Settings
from skill_dispatch.main import create_app
from skill_dispatch.models.request import RequestType
from skill_dispatch.models.response import ResponseEnvelope
from skill_dispatch.services.pipeline import HandlerInput, RequestHandler, Skill
from skill_dispatch.services.predicates import is_intent_name, is_request_type
from skill_dispatch.services.standard import build_default_skill

APPLICATION_ID = "amzn1.ask.skill.test"


def make_envelope(
    request_type: str = RequestType.LAUNCH,
    intent: dict[str, Any] | None = None,
    timestamp: str | None = None,
    application_id: str = APPLICATION_ID,
    attributes: dict[str, Any] | None = None,
    user_id: str = "amzn1.ask.account.user",
    **request_fields: Any,
) -> dict[str, Any]:
    """Build a raw request envelope as Alexa would send it."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    request: dict[str, Any] = {
        "type": request_type,
        "requestId": "amzn1.echo-api.request.1",
        "timestamp": timestamp,
        "locale": "en-US",
        **request_fields,
    }
    if intent is not None:
        request["intent"] = intent

    return {
        "version": "1.0",
        "session": {
            "new": attributes is None,
            "sessionId": "amzn1.echo-api.session.1",
            "attributes": attributes or {},
            "application": {"applicationId": application_id},
            "user": {"userId": user_id},
        },
        "request": request,
        "context": {
            "System": {
                "application": {"applicationId": application_id},
                "device": {"deviceId": "device-1", "supportedInterfaces": {"AudioPlayer": {}}},
                "user": {"userId": user_id},
            }
        },
    }


def intent_envelope(name: str, slots: dict[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
    return make_envelope(
        RequestType.INTENT,
        intent={"name": name, "confirmationStatus": "NONE", "slots": slots or {}},
        **kwargs,
    )


class LaunchHandler(RequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_request_type(RequestType.LAUNCH)(handler_input)

    def handle(self, handler_input: HandlerInput) -> ResponseEnvelope:
        return (
            handler_input.response_builder.speak("Welcome to the test skill.")
            .reprompt("What would you like to do?")
            .with_should_end_session(False)
            .get_response()
        )


class EchoIntentHandler(RequestHandler):
    """Repeat the phrase slot and count turns in the session."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name("EchoIntent")(handler_input)

    def handle(self, handler_input: HandlerInput) -> ResponseEnvelope:
        slot = handler_input.request.intent.slots.get("phrase")
        phrase = slot.value if slot else ""
        attributes = handler_input.session_attributes
        attributes["count"] = attributes.get("count", 0) + 1

        return (
            handler_input.response_builder.speak(phrase or "Nothing to repeat.")
            .with_simple_card("Echo", phrase)
            .with_should_end_session(False)
            .get_response()
        )


class FailingIntentHandler(RequestHandler):
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return is_intent_name("FailIntent")(handler_input)

    def handle(self, handler_input: HandlerInput) -> ResponseEnvelope:
        raise RuntimeError("backend unavailable")


@pytest.fixture
def test_settings() -> Settings:
    return Settings(application_id=APPLICATION_ID, persistence_table_name="")


@pytest.fixture
def skill(test_settings: Settings) -> Skill:
    return build_default_skill(
        test_settings,
        handlers=[LaunchHandler(), EchoIntentHandler(), FailingIntentHandler()],
    )


@pytest.fixture
def client(skill: Skill) -> TestClient:
    return TestClient(create_app(skill))
