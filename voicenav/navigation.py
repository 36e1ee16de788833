"""Navigation collaborator: hands routes to the host application."""

import logging
from abc import ABC, abstractmethod

from voicenav.events.event_bus import EventBus
from voicenav.events.types import NavigationEvent

logger = logging.getLogger(__name__)


class Navigator(ABC):
    """Accepts an opaque route string and routes the host UI to it."""

    @abstractmethod
    async def navigate(self, route: str, feedback_text: str = "") -> None:
        """Request navigation to *route*."""


class BusNavigator(Navigator):
    """Publishes NavigationEvents for the host to follow (e.g. over SSE)."""

    def __init__(self, navigation_bus: EventBus[NavigationEvent]) -> None:
        self._bus = navigation_bus
        self._last_route: str | None = None

    @property
    def last_route(self) -> str | None:
        return self._last_route

    async def navigate(self, route: str, feedback_text: str = "") -> None:
        self._last_route = route
        delivered = await self._bus.emit(
            NavigationEvent(route=route, feedback_text=feedback_text)
        )
        if delivered == 0:
            logger.info("Navigation to %s requested but no host is subscribed", route)
