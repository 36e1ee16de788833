"""SpeechSynthesizer that renders text with a TTS provider and plays it locally."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from voicenav.feedback.provider import TTSProvider
from voicenav.feedback.synthesizer import SpeechSynthesizer

if TYPE_CHECKING:
    from voicenav.feedback.audio_player import AudioPlayer

logger = logging.getLogger(__name__)


class Speaker(SpeechSynthesizer):
    """Speaks one utterance at a time; a new one cancels the old."""

    def __init__(self, provider: TTSProvider, player: AudioPlayer | None = None) -> None:
        self._provider = provider
        if player is None:
            # sounddevice needs PortAudio at import time.
            from voicenav.feedback.audio_player import AudioPlayer

            player = AudioPlayer()
        self._player = player
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        await self._provider.start()
        await self._player.start()
        logger.info(
            "Speaker started (provider=%s, available=%s)",
            self._provider.provider_name,
            self.is_available,
        )

    async def stop(self) -> None:
        self._cancel_current()
        await self._player.stop()
        await self._provider.stop()

    @property
    def is_available(self) -> bool:
        return self._provider.is_available and self._player.is_available

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name

    @property
    def is_speaking(self) -> bool:
        return self._task is not None and not self._task.done()

    def speak(self, text: str) -> None:
        try:
            self._cancel_current()
            self._task = asyncio.get_running_loop().create_task(self._say(text))
        except Exception:
            logger.warning("Could not schedule speech for %r", text, exc_info=True)

    def _cancel_current(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self._player.interrupt()
        self._task = None

    async def _say(self, text: str) -> None:
        try:
            pcm = await self._provider.synthesize(text)
            if pcm is None:
                logger.debug("No audio synthesized for %r", text)
                return
            await self._player.play(pcm)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.warning("Speech playback failed for %r", text, exc_info=True)
