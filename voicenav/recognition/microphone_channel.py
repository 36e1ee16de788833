"""SpeechChannel backed by the local microphone and the Whisper API.

Each ``start()`` launches one capture task: record until silence,
transcribe, then report exactly one of result / error / end to the
listener. ``stop()`` only signals the recording thread; the task still
finishes and reports ``on_end`` for its own session id.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from voicenav.recognition.channel import RecognitionListener, SpeechChannel
from voicenav.recognition.stt_client import STTClient
from voicenav.recognition.types import (
    ERROR_AUDIO_CAPTURE,
    ERROR_NETWORK,
    ERROR_NO_SPEECH,
)

if TYPE_CHECKING:
    from voicenav.recognition.microphone import MicrophoneCapture

logger = logging.getLogger(__name__)


class MicrophoneSpeechChannel(SpeechChannel):
    """Single-utterance capture over sounddevice + Whisper."""

    def __init__(
        self,
        microphone: MicrophoneCapture | None = None,
        stt_client: STTClient | None = None,
    ) -> None:
        if microphone is None:
            # sounddevice needs PortAudio at import time.
            from voicenav.recognition.microphone import MicrophoneCapture

            microphone = MicrophoneCapture()
        self._microphone = microphone
        self._stt_client = stt_client or STTClient()
        self._task: asyncio.Task | None = None
        self._stop_requested: bool = False

    async def open(self) -> None:
        await self._microphone.start()
        await self._stt_client.start()
        logger.info(
            "Microphone channel opened (mic=%s, stt=%s)",
            self._microphone.is_available,
            self._stt_client.is_available,
        )

    async def close(self) -> None:
        await self._discard_task()
        await self._stt_client.stop()
        await self._microphone.stop()

    @property
    def is_supported(self) -> bool:
        return self._microphone.is_available and self._stt_client.is_available

    @property
    def is_capturing(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, session_id: int, listener: RecognitionListener) -> None:
        # A capture from a stopped session may still be winding down.
        await self._discard_task()
        self._stop_requested = False
        self._task = asyncio.create_task(self._capture(session_id, listener))

    async def stop(self) -> None:
        self._stop_requested = True
        self._microphone.cancel()

    async def _discard_task(self) -> None:
        if self._task is None or self._task.done():
            self._task = None
            return
        self._microphone.cancel()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _capture(self, session_id: int, listener: RecognitionListener) -> None:
        """Record, transcribe and report for one session."""
        try:
            try:
                audio = await self._microphone.capture_until_silence()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("Microphone capture failed", exc_info=True)
                await listener.on_error(session_id, ERROR_AUDIO_CAPTURE)
                return

            if self._stop_requested:
                await listener.on_end(session_id)
                return

            if audio is None:
                await listener.on_error(session_id, ERROR_NO_SPEECH)
                return

            transcript = await self._stt_client.transcribe(audio)
            if transcript is None:
                await listener.on_error(session_id, ERROR_NETWORK)
            elif not transcript:
                await listener.on_error(session_id, ERROR_NO_SPEECH)
            else:
                await listener.on_result(session_id, transcript)
        except asyncio.CancelledError:
            logger.debug("Capture task for session %d cancelled", session_id)
            raise
        except Exception:
            logger.warning(
                "Listener failed handling session %d", session_id, exc_info=True
            )
