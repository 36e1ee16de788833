"""Wires catalog, matcher, executor, channel and controller together.

The engine owns the notice and navigation buses the host listens on, and
is the single object the HTTP server and the CLI talk to.
"""

import logging
from collections.abc import Iterable

from voicenav.catalog.topics import DEFAULT_TOPICS
from voicenav.catalog.types import Catalog, DynamicEntity, Role
from voicenav.config import ACCEPTANCE_THRESHOLD, DEFAULT_ROLE, check_thresholds
from voicenav.events.event_bus import EventBus
from voicenav.events.types import NavigationEvent, Notice
from voicenav.executor import CommandExecutor, ExecutionOutcome
from voicenav.feedback.provider_factory import create_synthesizer
from voicenav.feedback.synthesizer import SpeechSynthesizer
from voicenav.matching.command_index import CommandIndex
from voicenav.matching.fuzzy_matcher import FuzzyMatcher
from voicenav.matching.text_matcher import TextMatcher
from voicenav.navigation import BusNavigator, Navigator
from voicenav.recognition.channel import SpeechChannel
from voicenav.recognition.controller import RecognitionController
from voicenav.recognition.types import SessionState

logger = logging.getLogger(__name__)


class VoiceNavEngine:
    """Voice-command navigation for one user session."""

    def __init__(
        self,
        channel: SpeechChannel | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        matcher: TextMatcher | None = None,
        navigator: Navigator | None = None,
        *,
        role: Role | str = DEFAULT_ROLE,
        entities: Iterable[DynamicEntity] = DEFAULT_TOPICS,
        acceptance_threshold: float = ACCEPTANCE_THRESHOLD,
    ) -> None:
        self.notice_bus: EventBus[Notice] = EventBus()
        self.navigation_bus: EventBus[NavigationEvent] = EventBus()

        matcher = matcher or FuzzyMatcher()
        check_thresholds(matcher.search_threshold, acceptance_threshold)

        if channel is None:
            from voicenav.recognition.microphone_channel import MicrophoneSpeechChannel

            channel = MicrophoneSpeechChannel()

        self._entities: tuple[DynamicEntity, ...] = tuple(entities)
        self._index = CommandIndex(matcher, role, self._entities)
        self._channel = channel
        self._synthesizer = synthesizer or create_synthesizer()
        self._executor = CommandExecutor(
            navigator or BusNavigator(self.navigation_bus),
            self._synthesizer,
            self.notice_bus,
            acceptance_threshold=acceptance_threshold,
        )
        self._controller = RecognitionController(channel, self._index, self._executor)

    async def start(self) -> None:
        """Open speech channel and synthesizer, then detect capture support."""
        await self._synthesizer.start()
        await self._channel.open()
        self._controller.detect_support()
        logger.info(
            "Voice navigation started (role=%s, supported=%s, commands=%d)",
            self.role.value,
            self.is_supported,
            len(self.catalog),
        )

    async def stop(self) -> None:
        await self._controller.stop()
        await self._channel.close()
        await self._synthesizer.stop()
        logger.info("Voice navigation stopped")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def controller(self) -> RecognitionController:
        return self._controller

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    @property
    def index(self) -> CommandIndex:
        return self._index

    @property
    def catalog(self) -> Catalog:
        return self._index.catalog

    @property
    def role(self) -> Role:
        return self._index.role

    @property
    def entities(self) -> tuple[DynamicEntity, ...]:
        return self._entities

    @property
    def state(self) -> SessionState:
        return self._controller.state

    @property
    def is_listening(self) -> bool:
        return self._controller.is_listening

    @property
    def is_supported(self) -> bool:
        return self._controller.is_supported

    @property
    def synthesizer(self) -> SpeechSynthesizer:
        return self._synthesizer

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_context(
        self,
        role: Role | str,
        entities: Iterable[DynamicEntity] | None = None,
    ) -> Catalog:
        """Rebuild the catalog for a new role and/or topic list.

        Passing ``entities=None`` keeps the current topics.
        """
        if entities is not None:
            self._entities = tuple(entities)
        return self._index.rebuild(role, self._entities)

    async def toggle(self) -> SessionState:
        return await self._controller.toggle()

    async def handle_text(self, text: str) -> ExecutionOutcome:
        """Run a typed command through matching and execution, bypassing capture.

        An open capture session is stopped first so its transcript cannot
        trigger a second navigation.
        """
        await self._controller.stop()
        heard = text.strip().lower()
        results = self._index.query(heard)
        return await self._executor.execute(results, heard)
