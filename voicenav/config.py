"""Configuration constants and helpers for VoiceNav."""

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_PORT: int = 7870


def get_port() -> int:
    """Return the server port from VOICENAV_PORT env var, or DEFAULT_PORT."""
    raw = os.environ.get("VOICENAV_PORT")
    if raw is not None:
        try:
            return int(raw)
        except ValueError:
            return DEFAULT_PORT
    return DEFAULT_PORT


# --- Matching configuration ---

SEARCH_THRESHOLD: float = float(os.environ.get("VOICENAV_SEARCH_THRESHOLD", "0.4"))
ACCEPTANCE_THRESHOLD: float = float(
    os.environ.get("VOICENAV_ACCEPTANCE_THRESHOLD", "0.5")
)  # Top hit must score strictly below this to be executed.
TOKEN_FLOOR: float = float(
    os.environ.get("VOICENAV_TOKEN_FLOOR", "0.7")
)  # Token pairs less similar than this count as unrelated.

DEFAULT_ROLE: str = os.environ.get("VOICENAV_DEFAULT_ROLE", "student")
LANGUAGE: str = os.environ.get("VOICENAV_LANGUAGE", "en")


def check_thresholds(search: float, acceptance: float) -> bool:
    """Return True if *acceptance* is at least as permissive as *search*.

    Logs a warning otherwise: hits returned by the search would then be
    rejected at acceptance time.
    """
    if acceptance < search:
        logger.warning(
            "Acceptance threshold %.2f is below search threshold %.2f",
            acceptance,
            search,
        )
        return False
    return True


# --- Whisper STT configuration ---

STT_API_KEY: str = os.environ.get("VOICENAV_STT_API_KEY", "")
STT_BASE_URL: str = os.environ.get("VOICENAV_STT_BASE_URL", "https://api.openai.com")
STT_MODEL: str = os.environ.get("VOICENAV_STT_MODEL", "whisper-1")
STT_TIMEOUT: float = float(os.environ.get("VOICENAV_STT_TIMEOUT", "10.0"))
STT_HEALTH_CHECK_INTERVAL: float = float(
    os.environ.get("VOICENAV_STT_HEALTH_CHECK_INTERVAL", "60.0")
)


# --- Microphone configuration ---

AUDIO_SAMPLE_RATE: int = int(os.environ.get("VOICENAV_AUDIO_SAMPLE_RATE", "16000"))
STT_LISTEN_TIMEOUT: float = float(
    os.environ.get("VOICENAV_LISTEN_TIMEOUT", "6.0")
)  # Seconds to wait for speech onset before reporting no-speech.
STT_MAX_RECORD_DURATION: float = float(
    os.environ.get("VOICENAV_MAX_RECORD_DURATION", "8.0")
)
STT_SILENCE_THRESHOLD: float = float(
    os.environ.get("VOICENAV_SILENCE_THRESHOLD", "0.01")
)
STT_SILENCE_DURATION: float = float(
    os.environ.get("VOICENAV_SILENCE_DURATION", "1.0")
)


# --- TTS configuration ---

TTS_PROVIDER: str = os.environ.get("VOICENAV_TTS_PROVIDER", "elevenlabs")
ELEVENLABS_API_KEY: str = os.environ.get("VOICENAV_ELEVENLABS_API_KEY", "")
ELEVENLABS_BASE_URL: str = os.environ.get(
    "VOICENAV_ELEVENLABS_BASE_URL", "https://api.elevenlabs.io"
)
TTS_VOICE_ID: str = os.environ.get("VOICENAV_TTS_VOICE_ID", "21m00Tcm4TlvDq8ikWAM")
TTS_MODEL: str = os.environ.get("VOICENAV_TTS_MODEL", "eleven_turbo_v2_5")
TTS_TIMEOUT: float = float(os.environ.get("VOICENAV_TTS_TIMEOUT", "10.0"))
TTS_HEALTH_CHECK_INTERVAL: float = float(
    os.environ.get("VOICENAV_TTS_HEALTH_CHECK_INTERVAL", "60.0")
)
# Feedback lines repeat ("Opening dashboard."), so rendered audio is kept.
TTS_CACHE_SIZE: int = int(os.environ.get("VOICENAV_TTS_CACHE_SIZE", "64"))
