"""Factories for the user-visible notices emitted by the voice toggle."""

from voicenav.events.types import Notice, NoticeKind, NoticeLevel

NOT_RECOGNIZED_SPEECH = "Sorry, I didn't recognize that command."


def command_recognized(feedback_text: str) -> Notice:
    return Notice(
        kind=NoticeKind.COMMAND_RECOGNIZED,
        title="Voice Command Recognized",
        description=feedback_text,
    )


def command_not_recognized(transcript: str) -> Notice:
    """Echo what was heard so the user can correct their phrasing."""
    return Notice(
        kind=NoticeKind.COMMAND_NOT_RECOGNIZED,
        title="Command Not Recognized",
        description=f'Heard: "{transcript}"',
        level=NoticeLevel.DESTRUCTIVE,
    )


def permission_denied() -> Notice:
    return Notice(
        kind=NoticeKind.PERMISSION_DENIED,
        title="Microphone Access Denied",
        description="Please enable microphone permissions in your browser settings.",
        level=NoticeLevel.DESTRUCTIVE,
    )


def no_microphone() -> Notice:
    return Notice(
        kind=NoticeKind.NO_MICROPHONE,
        title="No Microphone Found",
        description="A microphone is required for voice commands.",
        level=NoticeLevel.DESTRUCTIVE,
    )


def recognition_error() -> Notice:
    return Notice(
        kind=NoticeKind.RECOGNITION_ERROR,
        title="Voice Error",
        description="An error occurred with voice recognition.",
        level=NoticeLevel.DESTRUCTIVE,
    )


def start_failed() -> Notice:
    return Notice(
        kind=NoticeKind.START_FAILED,
        title="Error",
        description="Could not start voice recognition. Please check microphone permissions.",
        level=NoticeLevel.DESTRUCTIVE,
    )


def unsupported_environment() -> Notice:
    return Notice(
        kind=NoticeKind.UNSUPPORTED_ENVIRONMENT,
        title="Unsupported Browser",
        description="Voice commands are not available in your browser.",
        level=NoticeLevel.DESTRUCTIVE,
    )
