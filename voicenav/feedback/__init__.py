"""Spoken and on-screen feedback for executed or rejected commands."""

from voicenav.feedback.provider_factory import create_synthesizer
from voicenav.feedback.synthesizer import NullSynthesizer, SpeechSynthesizer

__all__ = [
    "NullSynthesizer",
    "SpeechSynthesizer",
    "create_synthesizer",
]
