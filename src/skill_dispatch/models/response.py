"""Outbound Alexa response envelope models."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from .display import DisplayImageObject, DisplayTemplate
from .request import Intent


class OutputSpeech(BaseModel):
    """What Alexa should say."""

    type: Literal["PlainText", "SSML"] = "SSML"
    text: str | None = None
    ssml: str | None = None


class Reprompt(BaseModel):
    """Speech used when the user does not answer."""

    outputSpeech: OutputSpeech


class CardImage(BaseModel):
    """Image URLs for a Standard card."""

    smallImageUrl: str | None = None
    largeImageUrl: str | None = None


class Card(BaseModel):
    """Card shown in the Alexa app."""

    type: Literal["Simple", "Standard", "LinkAccount", "AskForPermissionsConsent"]
    title: str | None = None
    content: str | None = None
    text: str | None = None
    image: CardImage | None = None
    permissions: list[str] | None = None


# Dialog


class DialogDelegateDirective(BaseModel):
    """Let Alexa handle the next turn of the dialog."""

    type: Literal["Dialog.Delegate"] = "Dialog.Delegate"
    updatedIntent: Intent | None = None


class DialogElicitSlotDirective(BaseModel):
    """Ask the user for the value of a slot."""

    type: Literal["Dialog.ElicitSlot"] = "Dialog.ElicitSlot"
    slotToElicit: str
    updatedIntent: Intent | None = None


class DialogConfirmSlotDirective(BaseModel):
    """Ask the user to confirm a slot value."""

    type: Literal["Dialog.ConfirmSlot"] = "Dialog.ConfirmSlot"
    slotToConfirm: str
    updatedIntent: Intent | None = None


class DialogConfirmIntentDirective(BaseModel):
    """Ask the user to confirm the whole intent."""

    type: Literal["Dialog.ConfirmIntent"] = "Dialog.ConfirmIntent"
    updatedIntent: Intent | None = None


# AudioPlayer


class AudioStream(BaseModel):
    """Stream to play."""

    url: str
    token: str
    expectedPreviousToken: str | None = None
    offsetInMilliseconds: int = 0


class AudioItemMetadata(BaseModel):
    """Metadata shown on screen devices during playback."""

    title: str | None = None
    subtitle: str | None = None
    art: DisplayImageObject | None = None
    backgroundImage: DisplayImageObject | None = None


class AudioItem(BaseModel):
    stream: AudioStream
    metadata: AudioItemMetadata | None = None


class AudioPlayerPlayDirective(BaseModel):
    """Start or enqueue a stream.

    shouldEndSession should be left false or playback pauses immediately.
    """

    type: Literal["AudioPlayer.Play"] = "AudioPlayer.Play"
    playBehavior: Literal["ENQUEUE", "REPLACE_ALL", "REPLACE_ENQUEUED"]
    audioItem: AudioItem


class AudioPlayerStopDirective(BaseModel):
    type: Literal["AudioPlayer.Stop"] = "AudioPlayer.Stop"


class AudioPlayerClearQueueDirective(BaseModel):
    """Clear the queue, optionally stopping the current stream."""

    type: Literal["AudioPlayer.ClearQueue"] = "AudioPlayer.ClearQueue"
    clearBehavior: Literal["CLEAR_ENQUEUED", "CLEAR_ALL"]


# Display, Hint, VideoApp


class DisplayRenderTemplateDirective(BaseModel):
    type: Literal["Display.RenderTemplate"] = "Display.RenderTemplate"
    template: DisplayTemplate


class PlainTextHint(BaseModel):
    type: Literal["PlainText"] = "PlainText"
    text: str


class HintDirective(BaseModel):
    """Suggest an utterance on screen devices."""

    type: Literal["Hint"] = "Hint"
    hint: PlainTextHint


class VideoItemMetadata(BaseModel):
    title: str | None = None
    subtitle: str | None = None


class VideoItem(BaseModel):
    source: str
    metadata: VideoItemMetadata | None = None


class VideoAppLaunchDirective(BaseModel):
    """Launch the video app; the session cannot end in the same response."""

    type: Literal["VideoApp.Launch"] = "VideoApp.Launch"
    videoItem: VideoItem


Directive = Annotated[
    Union[
        DialogDelegateDirective,
        DialogElicitSlotDirective,
        DialogConfirmSlotDirective,
        DialogConfirmIntentDirective,
        AudioPlayerPlayDirective,
        AudioPlayerStopDirective,
        AudioPlayerClearQueueDirective,
        DisplayRenderTemplateDirective,
        HintDirective,
        VideoAppLaunchDirective,
    ],
    Field(discriminator="type"),
]


class ResponseBody(BaseModel):
    """Body of the response envelope."""

    outputSpeech: OutputSpeech | None = None
    card: Card | None = None
    reprompt: Reprompt | None = None
    directives: list[Directive] = Field(default_factory=list)
    shouldEndSession: bool = False


class ResponseEnvelope(BaseModel):
    """Full Alexa response envelope."""

    version: str = "1.0"
    sessionAttributes: dict[str, Any] | None = None
    response: ResponseBody = Field(default_factory=ResponseBody)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body Alexa expects.

        Unset optional fields and an empty directive list are omitted;
        ``shouldEndSession`` is always present. Session attributes are only
        sent while the session continues.
        """
        body = self.response.model_dump(mode="json", exclude_none=True)
        if not body.get("directives"):
            body.pop("directives", None)

        wire: dict[str, Any] = {"version": self.version, "response": body}
        if self.sessionAttributes is not None and not self.response.shouldEndSession:
            wire["sessionAttributes"] = self.sessionAttributes
        return wire
