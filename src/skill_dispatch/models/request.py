"""Inbound Alexa request envelope models.

Field names match the JSON sent by the Alexa service so envelopes can be
loaded with ``RequestEnvelope.model_validate(body)``.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..services.slot_resolution import ResolutionStatus


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class RequestType:
    """Request type names sent in ``request.type``."""

    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SESSION_ENDED = "SessionEndedRequest"
    PLAYBACK_STARTED = "AudioPlayer.PlaybackStarted"
    PLAYBACK_FINISHED = "AudioPlayer.PlaybackFinished"
    PLAYBACK_STOPPED = "AudioPlayer.PlaybackStopped"
    PLAYBACK_NEARLY_FINISHED = "AudioPlayer.PlaybackNearlyFinished"
    PLAYBACK_FAILED = "AudioPlayer.PlaybackFailed"
    SYSTEM_EXCEPTION = "System.ExceptionEncountered"


class BuiltinIntent:
    """Names of the AMAZON built-in intents."""

    START_OVER = "AMAZON.StartOverIntent"
    CANCEL = "AMAZON.CancelIntent"
    PAUSE = "AMAZON.PauseIntent"
    HELP = "AMAZON.HelpIntent"
    STOP = "AMAZON.StopIntent"
    REPEAT = "AMAZON.RepeatIntent"
    FALLBACK = "AMAZON.FallbackIntent"


class Application(_WireModel):
    """Skill application identity."""

    applicationId: str = ""


class User(_WireModel):
    """User ID and, for linked accounts, the access token."""

    userId: str = ""
    accessToken: str | None = None


class Session(_WireModel):
    """Session state attached to launch, intent and session-ended requests."""

    new: bool = False
    sessionId: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    application: Application = Field(default_factory=Application)
    user: User = Field(default_factory=User)


class Device(_WireModel):
    """Device that sent the request."""

    deviceId: str = ""
    supportedInterfaces: dict[str, Any] = Field(default_factory=dict)


class SystemInfo(_WireModel):
    """Current state of the Alexa service and device."""

    apiAccessToken: str = ""
    apiEndpoint: str = ""
    application: Application = Field(default_factory=Application)
    device: Device = Field(default_factory=Device)
    user: User = Field(default_factory=User)


class AudioPlayerState(_WireModel):
    """AudioPlayer interface state at the time of the request."""

    token: str | None = None
    offsetInMilliseconds: int | None = None
    playerActivity: str = ""


class Context(_WireModel):
    """Device and system snapshot sent with every request."""

    System: SystemInfo = Field(default_factory=SystemInfo)
    AudioPlayer: AudioPlayerState = Field(default_factory=AudioPlayerState)

    def supports_interface(self, name: str) -> bool:
        """Return True if the device advertises the interface (e.g. ``Display``)."""
        return name in self.System.device.supportedInterfaces


class IntentSlot(_WireModel):
    """Slot value recognized for an intent."""

    name: str = ""
    value: str = ""
    confirmationStatus: str | None = None
    # Shape is defined by the platform; see services.slot_resolution
    resolutions: Any = None

    @property
    def resolution_status(self) -> "ResolutionStatus":
        from ..services.slot_resolution import resolution_status

        return resolution_status(self.resolutions)

    @property
    def is_valid(self) -> bool:
        """True if the value matched the slot type or was not checked against one."""
        from ..services.slot_resolution import is_valid_status

        return is_valid_status(self.resolution_status)


class Intent(_WireModel):
    """Intent with its slots."""

    name: str = ""
    confirmationStatus: str | None = None
    slots: dict[str, IntentSlot] = Field(default_factory=dict)


class RequestErrorInfo(_WireModel):
    """Error details on session-ended and system exception requests."""

    type: str = ""
    message: str = ""


class Cause(_WireModel):
    """Request that caused a System.ExceptionEncountered request."""

    requestId: str = ""


class PlaybackState(_WireModel):
    """Playback state reported by AudioPlayer.PlaybackFailed."""

    token: str = ""
    offsetInMilliseconds: int = 0
    playerActivity: str = ""


class Request(_WireModel):
    """Request payload.

    Common fields are always present; the rest are populated only for the
    request types that carry them.
    """

    type: str
    requestId: str = ""
    timestamp: str = ""
    locale: str = ""

    # IntentRequest
    intent: Intent | None = None
    dialogState: str = ""

    # SessionEndedRequest
    reason: str = ""

    # SessionEndedRequest, System.ExceptionEncountered
    error: RequestErrorInfo | None = None

    # System.ExceptionEncountered
    cause: Cause | None = None

    # AudioPlayer.*
    token: str = ""
    offsetInMilliseconds: int = 0

    # AudioPlayer.PlaybackFailed
    currentPlaybackState: PlaybackState | None = None

    @property
    def intent_name(self) -> str:
        return self.intent.name if self.intent else ""


class RequestEnvelope(_WireModel):
    """Full Alexa request envelope."""

    version: str = "1.0"
    session: Session | None = None
    request: Request
    context: Context = Field(default_factory=Context)

    @property
    def application_id(self) -> str:
        """Application ID from the session, or from the context when there is no session."""
        if self.session is not None:
            return self.session.application.applicationId
        return self.context.System.application.applicationId
