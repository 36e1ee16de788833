"""Abstract base class for spoken feedback, plus a silent fallback."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class SpeechSynthesizer(ABC):
    """Fire-and-forget text-to-speech.

    ``speak()`` returns immediately and must never raise: failures are
    logged and dropped so speech never delays navigation. Speaking while a
    previous utterance is still playing cuts the previous one off.
    """

    @abstractmethod
    async def start(self) -> None:
        """Initialize clients and audio devices."""

    @abstractmethod
    async def stop(self) -> None:
        """Cancel pending speech and release resources."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether speech can currently be produced."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable provider name for health/status display."""

    @abstractmethod
    def speak(self, text: str) -> None:
        """Schedule *text* to be spoken."""


class NullSynthesizer(SpeechSynthesizer):
    """Used when TTS is disabled; only logs what would have been said."""

    async def start(self) -> None:
        logger.info("Speech feedback disabled")

    async def stop(self) -> None:
        pass

    @property
    def is_available(self) -> bool:
        return False

    @property
    def provider_name(self) -> str:
        return "none"

    def speak(self, text: str) -> None:
        logger.debug("Speech disabled, not speaking: %s", text)
