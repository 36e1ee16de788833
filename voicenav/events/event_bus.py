"""Async fan-out bus for notices and navigation events."""

import asyncio
import logging
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

_DEFAULT_QUEUE_SIZE = 128

T = TypeVar("T")


class EventBus(Generic[T]):
    """Fan-out bus backed by one asyncio.Queue per subscriber.

    Emitting never blocks: a subscriber whose queue is full misses the
    event and a warning is logged. Every SSE client of the server is a
    subscriber, so a stalled browser tab cannot hold up the controller.
    """

    def __init__(self, maxsize: int = _DEFAULT_QUEUE_SIZE) -> None:
        self._subscribers: list[asyncio.Queue[T]] = []
        self._lock = asyncio.Lock()
        self._maxsize = maxsize

    async def emit(self, event: T) -> int:
        """Push *event* to every subscriber queue.

        Returns the number of subscribers that received it.
        """
        async with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for queue in subscribers:
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(
                    "Subscriber queue full, dropping %s",
                    getattr(event, "kind", type(event).__name__),
                )
        return delivered

    async def subscribe(self) -> asyncio.Queue[T]:
        queue: asyncio.Queue[T] = asyncio.Queue(maxsize=self._maxsize)
        async with self._lock:
            self._subscribers.append(queue)
        logger.debug("Subscriber added (total: %d)", len(self._subscribers))
        return queue

    async def unsubscribe(self, queue: asyncio.Queue[T]) -> None:
        """Remove a subscriber queue. Unknown queues are ignored."""
        async with self._lock:
            if queue in self._subscribers:
                self._subscribers.remove(queue)
                logger.debug(
                    "Subscriber removed (remaining: %d)", len(self._subscribers)
                )

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
