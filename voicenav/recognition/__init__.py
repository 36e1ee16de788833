"""Speech capture and the recognition session state machine."""

from voicenav.recognition.channel import RecognitionListener, SpeechChannel
from voicenav.recognition.controller import RecognitionController
from voicenav.recognition.types import (
    RecognitionErrorKind,
    SessionState,
    classify_error,
)

__all__ = [
    "RecognitionController",
    "RecognitionErrorKind",
    "RecognitionListener",
    "SessionState",
    "SpeechChannel",
    "classify_error",
]
