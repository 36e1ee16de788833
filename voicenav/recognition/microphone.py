"""Microphone capture of a single utterance with energy-based voice activity detection."""

import asyncio
import logging
import threading

import numpy as np
import sounddevice as sd

from voicenav.config import (
    AUDIO_SAMPLE_RATE,
    STT_LISTEN_TIMEOUT,
    STT_MAX_RECORD_DURATION,
    STT_SILENCE_DURATION,
    STT_SILENCE_THRESHOLD,
)

logger = logging.getLogger(__name__)

_CHUNK_DURATION = 0.1  # seconds per read


class MicrophoneCapture:
    """Captures audio from the default input device using sounddevice.

    Probe for a device at start, then record one utterance per
    ``capture_until_silence()`` call. ``cancel()`` ends the current
    recording at the next chunk boundary.
    """

    def __init__(self) -> None:
        self._available: bool = False
        self._listening: bool = False
        self._cancel_event: threading.Event | None = None

    async def start(self) -> None:
        """Probe for an input device. No-op if unavailable."""
        try:
            sd.query_devices(kind="input")
            self._available = True
            logger.info("Microphone input device detected, capture enabled")
        except Exception:
            self._available = False
            logger.warning("No microphone input device, capture disabled")

    async def stop(self) -> None:
        self.cancel()
        self._listening = False
        self._available = False

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def is_listening(self) -> bool:
        return self._listening

    def cancel(self) -> None:
        """Signal the capture thread to stop recording."""
        if self._cancel_event is not None:
            self._cancel_event.set()

    async def capture_until_silence(
        self,
        *,
        max_duration: float | None = None,
        silence_threshold: float | None = None,
        silence_duration: float | None = None,
        sample_rate: int | None = None,
        listen_timeout: float | None = None,
    ) -> bytes | None:
        """Record audio until silence is detected or max_duration is reached.

        Returns PCM 16-bit mono bytes, or None when no speech started within
        the listen timeout or the capture was cancelled before speech.
        Stream errors propagate so the caller can report a missing or
        unusable device.
        """
        if not self._available:
            return None

        cancel_event = threading.Event()
        self._cancel_event = cancel_event
        self._listening = True
        try:
            return await asyncio.to_thread(
                self._capture_sync,
                cancel_event,
                max_duration or STT_MAX_RECORD_DURATION,
                silence_threshold or STT_SILENCE_THRESHOLD,
                silence_duration or STT_SILENCE_DURATION,
                sample_rate or AUDIO_SAMPLE_RATE,
                listen_timeout or STT_LISTEN_TIMEOUT,
            )
        finally:
            self._listening = False

    def _capture_sync(
        self,
        cancel_event: threading.Event,
        max_duration: float,
        silence_threshold: float,
        silence_duration: float,
        sample_rate: int,
        listen_timeout: float,
    ) -> bytes | None:
        """Synchronous capture, run in a worker thread.

        1. Wait for speech onset (RMS above threshold) up to listen_timeout.
        2. Record until RMS stays below threshold for silence_duration,
           max_duration elapses, or cancel_event is set.
        """
        frames: list[np.ndarray] = []
        chunk_samples = int(sample_rate * _CHUNK_DURATION)
        silence_elapsed = 0.0
        total_elapsed = 0.0
        wait_elapsed = 0.0

        with sd.InputStream(
            samplerate=sample_rate,
            channels=1,
            dtype="int16",
            blocksize=chunk_samples,
        ) as stream:
            while wait_elapsed < listen_timeout:
                if cancel_event.is_set():
                    return None
                data, _overflowed = stream.read(chunk_samples)
                wait_elapsed += _CHUNK_DURATION
                if self._compute_rms(data) > silence_threshold:
                    frames.append(data.copy())
                    total_elapsed += _CHUNK_DURATION
                    break

            if not frames:
                return None

            while total_elapsed < max_duration and not cancel_event.is_set():
                data, _overflowed = stream.read(chunk_samples)
                frames.append(data.copy())
                total_elapsed += _CHUNK_DURATION

                if self._compute_rms(data) < silence_threshold:
                    silence_elapsed += _CHUNK_DURATION
                    if silence_elapsed >= silence_duration:
                        break
                else:
                    silence_elapsed = 0.0

        return np.concatenate(frames).tobytes()

    @staticmethod
    def _compute_rms(data: np.ndarray) -> float:
        """Compute RMS amplitude of int16 audio data, normalized to 0.0-1.0."""
        float_data = data.astype(np.float32) / 32768.0
        return float(np.sqrt(np.mean(float_data ** 2)))
