"""Whisper transcription client with health checking and graceful degradation."""

import io
import logging
import time
import wave

import httpx

from voicenav.config import (
    AUDIO_SAMPLE_RATE,
    LANGUAGE,
    STT_API_KEY,
    STT_BASE_URL,
    STT_HEALTH_CHECK_INTERVAL,
    STT_MODEL,
    STT_TIMEOUT,
)

logger = logging.getLogger(__name__)


class STTClient:
    """Sends captured utterances to the Whisper API.

    ``transcribe()`` distinguishes "nothing intelligible" (empty string)
    from "service failed" (None) so the channel can report them
    differently.
    """

    def __init__(self) -> None:
        self._available: bool = False
        self._last_health_check: float = 0.0
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Create the HTTP client and run the initial health check."""
        if not STT_API_KEY:
            self._available = False
            logger.info("No STT API key, speech recognition disabled")
            return

        self._client = httpx.AsyncClient(
            base_url=STT_BASE_URL,
            timeout=STT_TIMEOUT,
            headers={"Authorization": f"Bearer {STT_API_KEY}"},
        )
        await self._check_health()

    async def stop(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        self._available = False

    @property
    def is_available(self) -> bool:
        return self._available

    async def transcribe(self, audio_bytes: bytes) -> str | None:
        """Return the transcript of PCM int16 mono audio.

        Returns ``""`` when the service heard nothing, None on any failure.
        """
        await self._maybe_recheck_health()

        if not self._available or not self._client:
            return None

        try:
            response = await self._client.post(
                "/v1/audio/transcriptions",
                data={"model": STT_MODEL, "language": LANGUAGE},
                files={"file": ("utterance.wav", self._wrap_wav(audio_bytes), "audio/wav")},
            )
            response.raise_for_status()
            transcript = response.json().get("text", "").strip()
        except Exception:
            logger.warning("STT transcription failed", exc_info=True)
            return None

        logger.debug("STT transcript: %r", transcript)
        return transcript

    async def _check_health(self) -> None:
        """Validate the API key via GET /v1/models."""
        self._last_health_check = time.monotonic()
        if not self._client:
            self._available = False
            return
        try:
            resp = await self._client.get("/v1/models")
        except (httpx.ConnectError, httpx.TimeoutException, OSError) as exc:
            self._available = False
            logger.warning("Whisper API not reachable at %s: %s", STT_BASE_URL, exc)
            return

        self._available = resp.status_code == 200
        if self._available:
            logger.info("Whisper STT available at %s (model: %s)", STT_BASE_URL, STT_MODEL)
        else:
            logger.warning(
                "Whisper API returned status %d, STT unavailable", resp.status_code
            )

    async def _maybe_recheck_health(self) -> None:
        if not self._available and self._client is not None:
            elapsed = time.monotonic() - self._last_health_check
            if elapsed >= STT_HEALTH_CHECK_INTERVAL:
                await self._check_health()

    @staticmethod
    def _wrap_wav(pcm_bytes: bytes, sample_rate: int = AUDIO_SAMPLE_RATE) -> io.BytesIO:
        """Wrap raw PCM int16 bytes in a WAV header."""
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(1)
            wf.setsampwidth(2)
            wf.setframerate(sample_rate)
            wf.writeframes(pcm_bytes)
        buf.seek(0)
        return buf
