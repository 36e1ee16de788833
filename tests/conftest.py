"""Shared fixtures for VoiceNav tests."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from voicenav.catalog.types import DynamicEntity
from voicenav.engine import VoiceNavEngine
from voicenav.events.event_bus import EventBus
from voicenav.executor import CommandExecutor
from voicenav.feedback.synthesizer import SpeechSynthesizer
from voicenav.matching.command_index import CommandIndex
from voicenav.matching.fuzzy_matcher import FuzzyMatcher
from voicenav.navigation import Navigator
from voicenav.recognition.channel import RecognitionListener, SpeechChannel
from voicenav.recognition.controller import RecognitionController


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeSpeechChannel(SpeechChannel):
    """Records start/stop calls; tests drive the listener callbacks by hand."""

    def __init__(self, supported: bool = True, start_error: Exception | None = None):
        self.supported = supported
        self.start_error = start_error
        self.stop_error: Exception | None = None
        self.starts: list[tuple[int, RecognitionListener]] = []
        self.stop_calls = 0
        self.opened = False
        self.closed = False

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.closed = True

    @property
    def is_supported(self) -> bool:
        return self.supported

    async def start(self, session_id: int, listener: RecognitionListener) -> None:
        if self.start_error is not None:
            raise self.start_error
        self.starts.append((session_id, listener))

    async def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error is not None:
            raise self.stop_error


class RecordingNavigator(Navigator):
    """Collects requested routes instead of routing anywhere."""

    def __init__(self) -> None:
        self.routes: list[str] = []

    async def navigate(self, route: str, feedback_text: str = "") -> None:
        self.routes.append(route)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def topics() -> tuple[DynamicEntity, ...]:
    """Two lesson topics, small enough to reason about scores by hand."""
    return (
        DynamicEntity(title="Algebra", slug="algebra"),
        DynamicEntity(title="Probability", slug="probability"),
    )


@pytest.fixture
def notice_bus() -> EventBus:
    """Return a fresh EventBus instance with a small queue for testing."""
    return EventBus(maxsize=16)


@pytest.fixture
def matcher() -> FuzzyMatcher:
    return FuzzyMatcher()


@pytest.fixture
def index(matcher: FuzzyMatcher, topics) -> CommandIndex:
    """Return a CommandIndex built for a student with the test topics."""
    return CommandIndex(matcher, "student", topics)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def synthesizer() -> MagicMock:
    """Return a SpeechSynthesizer mock that speaks nothing."""
    mock = MagicMock(spec=SpeechSynthesizer)
    mock.start = AsyncMock()
    mock.stop = AsyncMock()
    mock.is_available = False
    mock.provider_name = "mock"
    return mock


@pytest.fixture
def executor(
    navigator: RecordingNavigator, synthesizer: MagicMock, notice_bus: EventBus
) -> CommandExecutor:
    return CommandExecutor(navigator, synthesizer, notice_bus)


@pytest.fixture
def channel() -> FakeSpeechChannel:
    return FakeSpeechChannel()


@pytest.fixture
def controller(
    channel: FakeSpeechChannel, index: CommandIndex, executor: CommandExecutor
) -> RecognitionController:
    return RecognitionController(channel, index, executor)


@pytest.fixture
def engine(channel: FakeSpeechChannel, synthesizer: MagicMock, topics) -> VoiceNavEngine:
    """Return a VoiceNavEngine with the fake channel and mocked synthesizer.

    Navigation goes through the engine's own navigation bus.
    """
    return VoiceNavEngine(
        channel=channel,
        synthesizer=synthesizer,
        role="student",
        entities=topics,
    )


@pytest.fixture
def app(engine: VoiceNavEngine):
    """Return the FastAPI app wired to the test engine (lifespan is not run)."""
    from voicenav.server.app import create_app

    return create_app(engine)


@pytest.fixture
async def async_client(app):
    """Return an httpx AsyncClient configured with the test FastAPI app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest.fixture
async def notices(notice_bus: EventBus):
    """Subscriber queue that collects every notice emitted on the bus."""
    return await notice_bus.subscribe()
