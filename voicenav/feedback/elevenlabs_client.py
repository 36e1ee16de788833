"""ElevenLabs TTS provider with health checking and graceful degradation.

Feedback texts come from a small fixed set, so rendered PCM is kept in a
bounded LRU keyed by text and each line is requested from the API once.
"""

import logging
import time
from collections import OrderedDict

import httpx

from voicenav.config import (
    AUDIO_SAMPLE_RATE,
    ELEVENLABS_API_KEY,
    ELEVENLABS_BASE_URL,
    TTS_CACHE_SIZE,
    TTS_HEALTH_CHECK_INTERVAL,
    TTS_MODEL,
    TTS_TIMEOUT,
    TTS_VOICE_ID,
)
from voicenav.feedback.provider import TTSProvider

logger = logging.getLogger(__name__)


class ElevenLabsClient(TTSProvider):
    """Posts feedback text to ElevenLabs and returns PCM audio."""

    def __init__(self, cache_size: int = TTS_CACHE_SIZE) -> None:
        self._available: bool = False
        self._last_health_check: float = 0.0
        self._client: httpx.AsyncClient | None = None
        self._cache: OrderedDict[str, bytes] = OrderedDict()
        self._cache_size = max(0, cache_size)

    async def start(self) -> None:
        if not ELEVENLABS_API_KEY:
            self._available = False
            logger.info("No ElevenLabs API key, spoken feedback disabled")
            return

        self._client = httpx.AsyncClient(
            base_url=ELEVENLABS_BASE_URL,
            timeout=TTS_TIMEOUT,
            headers={"xi-api-key": ELEVENLABS_API_KEY},
        )
        await self._check_health()

    async def stop(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        self._available = False
        self._cache.clear()

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def provider_name(self) -> str:
        return "elevenlabs"

    async def synthesize(self, text: str) -> bytes | None:
        text = text.strip()
        if not text:
            return None

        cached = self._cache.get(text)
        if cached is not None:
            self._cache.move_to_end(text)
            return cached

        await self._maybe_recheck_health()
        if not self._available or not self._client:
            return None

        try:
            response = await self._client.post(
                f"/v1/text-to-speech/{TTS_VOICE_ID}",
                json={"text": text, "model_id": TTS_MODEL},
                params={"output_format": f"pcm_{AUDIO_SAMPLE_RATE}"},
            )
            response.raise_for_status()
        except Exception:
            logger.warning("ElevenLabs synthesis failed for %r", text, exc_info=True)
            return None

        pcm = response.content
        if pcm:
            self._remember(text, pcm)
        return pcm or None

    def _remember(self, text: str, pcm: bytes) -> None:
        if self._cache_size == 0:
            return
        self._cache[text] = pcm
        self._cache.move_to_end(text)
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)

    async def _check_health(self) -> None:
        """Validate the API key via GET /v1/user."""
        self._last_health_check = time.monotonic()
        if not self._client:
            self._available = False
            return
        try:
            resp = await self._client.get("/v1/user")
        except (httpx.ConnectError, httpx.TimeoutException, OSError) as exc:
            self._available = False
            logger.warning(
                "ElevenLabs not reachable at %s, TTS disabled: %s",
                ELEVENLABS_BASE_URL,
                exc,
            )
            return

        self._available = resp.status_code == 200
        if self._available:
            logger.info("ElevenLabs TTS available (voice: %s)", TTS_VOICE_ID)
        else:
            logger.warning(
                "ElevenLabs returned status %d, TTS unavailable", resp.status_code
            )

    async def _maybe_recheck_health(self) -> None:
        if not self._available and self._client is not None:
            elapsed = time.monotonic() - self._last_health_check
            if elapsed >= TTS_HEALTH_CHECK_INTERVAL:
                await self._check_health()
