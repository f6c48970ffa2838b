"""Fluent builder for Alexa response envelopes."""

import logging
from typing import Any

from ..errors import InvalidDirectiveError
from ..models.display import DisplayTemplate
from ..models.request import Intent
from ..models.response import (
    AudioItem,
    AudioItemMetadata,
    AudioPlayerClearQueueDirective,
    AudioPlayerPlayDirective,
    AudioPlayerStopDirective,
    AudioStream,
    Card,
    CardImage,
    DialogConfirmIntentDirective,
    DialogConfirmSlotDirective,
    DialogDelegateDirective,
    DialogElicitSlotDirective,
    Directive,
    DisplayRenderTemplateDirective,
    HintDirective,
    OutputSpeech,
    PlainTextHint,
    Reprompt,
    ResponseEnvelope,
    VideoAppLaunchDirective,
    VideoItem,
    VideoItemMetadata,
)

logger = logging.getLogger(__name__)

SPEAK_OPEN = "<speak>"
SPEAK_CLOSE = "</speak>"

PLAY_BEHAVIORS = ("ENQUEUE", "REPLACE_ALL", "REPLACE_ENQUEUED")
CLEAR_BEHAVIORS = ("CLEAR_ENQUEUED", "CLEAR_ALL")


def strip_ssml(speech: str) -> str:
    """Remove surrounding whitespace and any enclosing <speak> root tags."""
    text = speech.strip()
    while text.startswith(SPEAK_OPEN) and text.endswith(SPEAK_CLOSE):
        text = text[len(SPEAK_OPEN) : -len(SPEAK_CLOSE)].strip()
    return text


def wrap_ssml(speech: str) -> str:
    """Wrap speech in a single <speak> root; already wrapped input is not nested."""
    return f"{SPEAK_OPEN}{strip_ssml(speech)}{SPEAK_CLOSE}"


def _require(value: str | None, field: str, directive: str) -> None:
    if not value:
        raise InvalidDirectiveError(f"{directive} directive requires a non-empty {field}")


class ResponseBuilder:
    """
    Accumulates a single in-flight response.

    Every method returns the builder so calls can be chained. Setters replace
    earlier values; directives are only ever appended, in call order.
    """

    def __init__(self, envelope: ResponseEnvelope | None = None) -> None:
        self._envelope = envelope or ResponseEnvelope()

    @property
    def _response(self):
        return self._envelope.response

    # Speech

    def speak(self, speech: str) -> "ResponseBuilder":
        """Have Alexa say the given text (plain or SSML)."""
        self._response.outputSpeech = OutputSpeech(type="SSML", ssml=wrap_ssml(speech))
        return self

    def reprompt(self, speech: str) -> "ResponseBuilder":
        """Speech Alexa uses if the user does not respond."""
        self._response.reprompt = Reprompt(
            outputSpeech=OutputSpeech(type="SSML", ssml=wrap_ssml(speech))
        )
        return self

    # Cards

    def with_simple_card(self, title: str, content: str) -> "ResponseBuilder":
        self._response.card = Card(type="Simple", title=title, content=content)
        return self

    def with_standard_card(
        self,
        title: str,
        text: str,
        small_image_url: str | None = None,
        large_image_url: str | None = None,
    ) -> "ResponseBuilder":
        """Card with title, text and optional image."""
        image = None
        if small_image_url or large_image_url:
            image = CardImage(smallImageUrl=small_image_url, largeImageUrl=large_image_url)

        self._response.card = Card(type="Standard", title=title, text=text, image=image)
        return self

    def with_link_account_card(self) -> "ResponseBuilder":
        self._response.card = Card(type="LinkAccount")
        return self

    def with_ask_for_permissions_consent_card(self, permissions: list[str]) -> "ResponseBuilder":
        self._response.card = Card(type="AskForPermissionsConsent", permissions=list(permissions))
        return self

    # Dialog directives

    def add_delegate_directive(self, updated_intent: Intent | None = None) -> "ResponseBuilder":
        return self.add_directive(DialogDelegateDirective(updatedIntent=updated_intent))

    def add_elicit_slot_directive(
        self, slot_to_elicit: str, updated_intent: Intent | None = None
    ) -> "ResponseBuilder":
        _require(slot_to_elicit, "slot name", "Dialog.ElicitSlot")
        return self.add_directive(
            DialogElicitSlotDirective(slotToElicit=slot_to_elicit, updatedIntent=updated_intent)
        )

    def add_confirm_slot_directive(
        self, slot_to_confirm: str, updated_intent: Intent | None = None
    ) -> "ResponseBuilder":
        _require(slot_to_confirm, "slot name", "Dialog.ConfirmSlot")
        return self.add_directive(
            DialogConfirmSlotDirective(slotToConfirm=slot_to_confirm, updatedIntent=updated_intent)
        )

    def add_confirm_intent_directive(self, updated_intent: Intent | None = None) -> "ResponseBuilder":
        return self.add_directive(DialogConfirmIntentDirective(updatedIntent=updated_intent))

    # AudioPlayer directives

    def add_audio_player_play_directive(
        self,
        play_behavior: str,
        url: str,
        token: str,
        offset_in_milliseconds: int = 0,
        expected_previous_token: str | None = None,
        metadata: AudioItemMetadata | None = None,
    ) -> "ResponseBuilder":
        """
        Stream audio from the given URL.

        Args:
            play_behavior: ENQUEUE, REPLACE_ALL or REPLACE_ENQUEUED
            url: HTTPS URL of the stream
            token: Opaque token identifying the stream
            offset_in_milliseconds: Where to start playback
            expected_previous_token: Token of the stream expected to be playing (ENQUEUE)
            metadata: Title and art for screen devices
        """
        if play_behavior not in PLAY_BEHAVIORS:
            raise InvalidDirectiveError(f"Unsupported play behavior: {play_behavior!r}")
        _require(url, "stream URL", "AudioPlayer.Play")
        _require(token, "stream token", "AudioPlayer.Play")
        if offset_in_milliseconds < 0:
            raise InvalidDirectiveError("AudioPlayer.Play offset must not be negative")

        stream = AudioStream(
            url=url,
            token=token,
            offsetInMilliseconds=offset_in_milliseconds,
            expectedPreviousToken=expected_previous_token or None,
        )
        return self.add_directive(
            AudioPlayerPlayDirective(
                playBehavior=play_behavior,
                audioItem=AudioItem(stream=stream, metadata=metadata),
            )
        )

    def add_audio_player_stop_directive(self) -> "ResponseBuilder":
        return self.add_directive(AudioPlayerStopDirective())

    def add_audio_player_clear_queue_directive(self, clear_behavior: str) -> "ResponseBuilder":
        if clear_behavior not in CLEAR_BEHAVIORS:
            raise InvalidDirectiveError(f"Unsupported clear behavior: {clear_behavior!r}")
        return self.add_directive(AudioPlayerClearQueueDirective(clearBehavior=clear_behavior))

    # Display, Hint, VideoApp directives

    def add_render_template_directive(self, template: DisplayTemplate) -> "ResponseBuilder":
        _require(template.type, "template type", "Display.RenderTemplate")
        _require(template.token, "template token", "Display.RenderTemplate")
        return self.add_directive(DisplayRenderTemplateDirective(template=template))

    def add_hint_directive(self, text: str) -> "ResponseBuilder":
        _require(text, "hint text", "Hint")
        return self.add_directive(HintDirective(hint=PlainTextHint(text=text)))

    def add_video_app_launch_directive(
        self,
        source: str,
        title: str | None = None,
        subtitle: str | None = None,
    ) -> "ResponseBuilder":
        """Launch a video; also pins shouldEndSession to false for this response."""
        _require(source, "video source", "VideoApp.Launch")

        metadata = None
        if title is not None or subtitle is not None:
            metadata = VideoItemMetadata(title=title, subtitle=subtitle)

        self._response.shouldEndSession = False
        return self.add_directive(
            VideoAppLaunchDirective(videoItem=VideoItem(source=source, metadata=metadata))
        )

    def add_directive(self, directive: Directive) -> "ResponseBuilder":
        """Append any directive model to the response."""
        if isinstance(directive, VideoAppLaunchDirective):
            self._response.shouldEndSession = False
        self._response.directives.append(directive)
        return self

    # Session

    def with_should_end_session(self, value: bool) -> "ResponseBuilder":
        """Set shouldEndSession; ignored once a VideoApp.Launch directive is present."""
        if self.has_video_app_launch():
            logger.debug("VideoApp.Launch present, keeping session open")
            return self

        self._response.shouldEndSession = value
        return self

    def with_session_attributes(self, attributes: dict[str, Any] | None) -> "ResponseBuilder":
        self._envelope.sessionAttributes = attributes
        return self

    def has_video_app_launch(self) -> bool:
        return any(isinstance(d, VideoAppLaunchDirective) for d in self._response.directives)

    def get_response(self) -> ResponseEnvelope:
        """Return the accumulated envelope."""
        return self._envelope
