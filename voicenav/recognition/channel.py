"""Abstract interfaces between the recognition controller and a speech stack.

A ``SpeechChannel`` captures one utterance per ``start()`` call and reports
back through a ``RecognitionListener``. Every callback carries the session
id passed to ``start()`` so the listener can discard callbacks from a
superseded session.
"""

from abc import ABC, abstractmethod


class RecognitionListener(ABC):
    """Receives the outcome of a capture session.

    Exactly one of the three callbacks is expected per session.
    """

    @abstractmethod
    async def on_result(self, session_id: int, transcript: str) -> None:
        """A finalized transcript is available."""

    @abstractmethod
    async def on_error(self, session_id: int, code: str) -> None:
        """Capture or recognition failed with raw error *code*."""

    @abstractmethod
    async def on_end(self, session_id: int) -> None:
        """The session ended without a result or an error."""


class SpeechChannel(ABC):
    """Single-utterance speech-to-text capability."""

    @abstractmethod
    async def open(self) -> None:
        """Probe devices and services. Called once before any ``start()``."""

    @abstractmethod
    async def close(self) -> None:
        """Release devices and clients."""

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Whether capture can work in this environment at all."""

    @abstractmethod
    async def start(self, session_id: int, listener: RecognitionListener) -> None:
        """Begin capturing one utterance and return without waiting for it.

        May raise if capture cannot begin; the caller treats that as a
        failed start.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Ask the active capture to finish early. Best effort, may be ignored."""
