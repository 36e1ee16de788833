"""Selects the speech synthesizer based on configuration."""

import logging

from voicenav.config import TTS_PROVIDER
from voicenav.feedback.synthesizer import NullSynthesizer, SpeechSynthesizer

logger = logging.getLogger(__name__)


def create_synthesizer(provider_name: str | None = None) -> SpeechSynthesizer:
    """Create the synthesizer named by *provider_name* or VOICENAV_TTS_PROVIDER.

    Returns:
        Speaker over ElevenLabsClient for "elevenlabs" (default)
        NullSynthesizer for "none"
    """
    name = (provider_name or TTS_PROVIDER).lower()

    if name == "none":
        logger.info("Spoken feedback disabled by configuration")
        return NullSynthesizer()

    if name != "elevenlabs":
        logger.warning("Unknown TTS provider %r, falling back to elevenlabs", name)

    from voicenav.feedback.elevenlabs_client import ElevenLabsClient
    from voicenav.feedback.speaker import Speaker

    logger.info("Creating ElevenLabs speaker")
    return Speaker(ElevenLabsClient())
