"""Plays synthesized feedback through the default output device."""

import asyncio
import logging

import numpy as np
import sounddevice as sd

from voicenav.config import AUDIO_SAMPLE_RATE

logger = logging.getLogger(__name__)


class AudioPlayer:
    """Blocking playback moved off the event loop with ``asyncio.to_thread``."""

    def __init__(self, sample_rate: int = AUDIO_SAMPLE_RATE) -> None:
        self._sample_rate = sample_rate
        self._available: bool = False

    async def start(self) -> None:
        """Probe for an output device."""
        try:
            sd.query_devices(kind="output")
            self._available = True
            logger.info("Audio output device detected, playback enabled")
        except Exception:
            self._available = False
            logger.warning("No audio output device, playback disabled")

    async def stop(self) -> None:
        self.interrupt()
        self._available = False

    @property
    def is_available(self) -> bool:
        return self._available

    async def play(self, pcm_bytes: bytes) -> None:
        """Play PCM int16 mono bytes and return when playback ends."""
        if not self._available or not pcm_bytes:
            return
        await asyncio.to_thread(self._play_sync, pcm_bytes)

    def interrupt(self) -> None:
        """Stop whatever is currently playing."""
        try:
            sd.stop()
        except Exception:
            logger.debug("sounddevice stop failed", exc_info=True)

    def _play_sync(self, pcm_bytes: bytes) -> None:
        audio_int16 = np.frombuffer(pcm_bytes, dtype=np.int16)
        audio_float32 = audio_int16.astype(np.float32) / 32768.0
        sd.play(audio_float32, samplerate=self._sample_rate)
        sd.wait()
