"""Notice and navigation events published to the host UI."""

from voicenav.events.event_bus import EventBus
from voicenav.events.types import NavigationEvent, Notice, NoticeKind, NoticeLevel

__all__ = [
    "EventBus",
    "NavigationEvent",
    "Notice",
    "NoticeKind",
    "NoticeLevel",
]
