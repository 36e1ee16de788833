"""Abstract base class for TTS audio providers.

A provider only turns text into PCM. Playback and cancellation belong to
``Speaker``, so providers can be swapped without touching either.
"""

from abc import ABC, abstractmethod


class TTSProvider(ABC):
    """Returns raw PCM 16kHz int16 mono bytes from ``synthesize()``.

    Providers never raise from ``synthesize()``: failures are returned as
    None and logged internally.
    """

    @abstractmethod
    async def start(self) -> None:
        """Initialize the provider (HTTP clients, health checks, etc.)."""

    @abstractmethod
    async def stop(self) -> None:
        """Shut down the provider and release resources."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the provider is currently healthy and can synthesize."""

    @abstractmethod
    async def synthesize(self, text: str) -> bytes | None:
        """Synthesize *text*, or return None on any failure."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable provider name."""
