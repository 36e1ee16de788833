"""Pydantic models for user-visible notices and navigation requests."""

import time
from enum import Enum

from pydantic import BaseModel, Field


class NoticeLevel(str, Enum):
    """Visual treatment of a notice (maps onto the host's toast variants)."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class NoticeKind(str, Enum):
    """What a notice reports."""

    COMMAND_RECOGNIZED = "command_recognized"
    COMMAND_NOT_RECOGNIZED = "command_not_recognized"
    PERMISSION_DENIED = "permission_denied"
    NO_MICROPHONE = "no_microphone"
    RECOGNITION_ERROR = "recognition_error"
    START_FAILED = "start_failed"
    UNSUPPORTED_ENVIRONMENT = "unsupported_environment"


class Notice(BaseModel):
    """An on-screen toast for the voice toggle's user."""

    kind: NoticeKind
    title: str
    description: str
    level: NoticeLevel = NoticeLevel.DEFAULT
    timestamp: float = Field(default_factory=time.time)


class NavigationEvent(BaseModel):
    """Request for the host to route to *route*."""

    route: str
    feedback_text: str = ""
    timestamp: float = Field(default_factory=time.time)
