"""Enums for the recognition session state machine and its error taxonomy."""

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle state of the recognition controller."""

    IDLE = "idle"
    LISTENING = "listening"
    FINALIZING = "finalizing"
    ERRORING = "erroring"


class RecognitionErrorKind(str, Enum):
    """Classified speech-capture failure."""

    NO_SPEECH = "no_speech"
    PERMISSION_DENIED = "permission_denied"
    NO_MICROPHONE = "no_microphone"
    OTHER = "other"


# Raw error codes a SpeechChannel may report (Web Speech API vocabulary).
ERROR_NO_SPEECH = "no-speech"
ERROR_NOT_ALLOWED = "not-allowed"
ERROR_SERVICE_NOT_ALLOWED = "service-not-allowed"
ERROR_NO_MICROPHONE = "no-microphone"
ERROR_AUDIO_CAPTURE = "audio-capture"
ERROR_NETWORK = "network"

_ERROR_KINDS: dict[str, RecognitionErrorKind] = {
    ERROR_NO_SPEECH: RecognitionErrorKind.NO_SPEECH,
    ERROR_NOT_ALLOWED: RecognitionErrorKind.PERMISSION_DENIED,
    ERROR_SERVICE_NOT_ALLOWED: RecognitionErrorKind.PERMISSION_DENIED,
    ERROR_NO_MICROPHONE: RecognitionErrorKind.NO_MICROPHONE,
    ERROR_AUDIO_CAPTURE: RecognitionErrorKind.NO_MICROPHONE,
}


def classify_error(code: str) -> RecognitionErrorKind:
    """Map a raw channel error code onto the error taxonomy.

    Unknown codes (including ``"network"`` and ``"aborted"``) become OTHER.
    """
    return _ERROR_KINDS.get(code.strip().lower(), RecognitionErrorKind.OTHER)
