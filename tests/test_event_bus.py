"""Tests for voicenav.events.event_bus — Async fan-out event bus."""

import asyncio

from voicenav.events.event_bus import EventBus
from voicenav.events.types import NavigationEvent, Notice, NoticeKind, NoticeLevel
from voicenav.feedback import notices


def _make_event(route: str = "/student/dashboard") -> NavigationEvent:
    """Helper to create a minimal event for testing."""
    return NavigationEvent(route=route, feedback_text="Opening dashboard.")


class TestSubscribe:
    """Tests for EventBus.subscribe()."""

    async def test_subscribe_creates_a_new_queue(self, notice_bus: EventBus):
        queue = await notice_bus.subscribe()
        assert isinstance(queue, asyncio.Queue)

    async def test_subscribe_increments_subscriber_count(self, notice_bus: EventBus):
        assert notice_bus.subscriber_count == 0
        await notice_bus.subscribe()
        assert notice_bus.subscriber_count == 1
        await notice_bus.subscribe()
        assert notice_bus.subscriber_count == 2


class TestEmit:
    """Tests for EventBus.emit()."""

    async def test_emit_fanout_to_multiple_subscribers(self):
        bus: EventBus[NavigationEvent] = EventBus()
        q1 = await bus.subscribe()
        q2 = await bus.subscribe()

        event = _make_event()
        delivered = await bus.emit(event)

        assert delivered == 2
        assert q1.get_nowait() is event
        assert q2.get_nowait() is event

    async def test_emit_to_empty_bus_returns_zero(self):
        bus: EventBus[NavigationEvent] = EventBus()
        assert await bus.emit(_make_event()) == 0

    async def test_emit_preserves_order(self):
        bus: EventBus[NavigationEvent] = EventBus()
        queue = await bus.subscribe()
        events = [_make_event(f"/route/{i}") for i in range(3)]
        for event in events:
            await bus.emit(event)
        assert [queue.get_nowait() for _ in events] == events

    async def test_emit_drops_event_when_queue_is_full(self):
        """A full subscriber misses the event; others still get it."""
        bus: EventBus[Notice] = EventBus(maxsize=1)
        slow = await bus.subscribe()
        fast = await bus.subscribe()

        await bus.emit(notices.permission_denied())
        fast.get_nowait()

        delivered = await bus.emit(notices.no_microphone())

        assert delivered == 1
        assert slow.qsize() == 1
        assert fast.get_nowait().kind == NoticeKind.NO_MICROPHONE


class TestUnsubscribe:
    """Tests for EventBus.unsubscribe()."""

    async def test_unsubscribe_stops_event_delivery(self, notice_bus: EventBus):
        queue = await notice_bus.subscribe()
        await notice_bus.unsubscribe(queue)

        await notice_bus.emit(notices.recognition_error())
        assert queue.empty()
        assert notice_bus.subscriber_count == 0

    async def test_unsubscribe_unknown_queue_is_noop(self, notice_bus: EventBus):
        foreign_queue: asyncio.Queue[Notice] = asyncio.Queue()
        await notice_bus.unsubscribe(foreign_queue)
        assert notice_bus.subscriber_count == 0


# ---------------------------------------------------------------------------
# Event models
# ---------------------------------------------------------------------------


class TestNoticeModels:

    def test_notice_defaults(self):
        notice = Notice(kind=NoticeKind.COMMAND_RECOGNIZED, title="t", description="d")
        assert notice.level == NoticeLevel.DEFAULT
        assert notice.timestamp > 0

    def test_notice_json(self):
        data = notices.command_not_recognized("open the pod bay doors").model_dump(
            mode="json"
        )
        assert data["kind"] == "command_not_recognized"
        assert data["level"] == "destructive"
        assert data["description"] == 'Heard: "open the pod bay doors"'

    def test_navigation_event_defaults(self):
        event = NavigationEvent(route="/help")
        assert event.feedback_text == ""
        assert event.timestamp > 0
