"""Tests for voicenav.recognition.microphone_channel — capture + transcription channel."""

import asyncio
import sys
import types
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicenav.recognition.channel import RecognitionListener
from voicenav.recognition.microphone_channel import MicrophoneSpeechChannel
from voicenav.recognition.stt_client import STTClient


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mic() -> MagicMock:
    mock = MagicMock()
    mock.start = AsyncMock()
    mock.stop = AsyncMock()
    mock.is_available = True
    mock.capture_until_silence = AsyncMock(return_value=b"\x01\x00" * 160)
    return mock


@pytest.fixture
def stt() -> MagicMock:
    mock = MagicMock()
    mock.start = AsyncMock()
    mock.stop = AsyncMock()
    mock.is_available = True
    mock.transcribe = AsyncMock(return_value="Go to Algebra")
    return mock


@pytest.fixture
def listener() -> MagicMock:
    return AsyncMock(spec=RecognitionListener)


@pytest.fixture
def mic_channel(mic, stt) -> MicrophoneSpeechChannel:
    return MicrophoneSpeechChannel(microphone=mic, stt_client=stt)


async def _run(channel: MicrophoneSpeechChannel, listener, session_id: int = 1) -> None:
    await channel.start(session_id, listener)
    await channel._task


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:

    async def test_open_starts_components(self, mic_channel, mic, stt):
        await mic_channel.open()
        mic.start.assert_awaited_once()
        stt.start.assert_awaited_once()

    async def test_close_stops_components(self, mic_channel, mic, stt):
        await mic_channel.close()
        mic.stop.assert_awaited_once()
        stt.stop.assert_awaited_once()

    def test_supported_needs_mic_and_stt(self, mic_channel, mic, stt):
        assert mic_channel.is_supported is True
        stt.is_available = False
        assert mic_channel.is_supported is False
        stt.is_available = True
        mic.is_available = False
        assert mic_channel.is_supported is False

    def test_default_components(self, monkeypatch):
        module = types.ModuleType("voicenav.recognition.microphone")
        module.MicrophoneCapture = MagicMock(name="MicrophoneCapture")
        monkeypatch.setitem(sys.modules, "voicenav.recognition.microphone", module)

        channel = MicrophoneSpeechChannel()

        assert channel._microphone is module.MicrophoneCapture.return_value
        assert isinstance(channel._stt_client, STTClient)


# ---------------------------------------------------------------------------
# Capture outcomes
# ---------------------------------------------------------------------------


class TestCapture:

    async def test_transcript_reported_as_result(self, mic_channel, listener, stt):
        await _run(mic_channel, listener)
        listener.on_result.assert_awaited_once_with(1, "Go to Algebra")
        listener.on_error.assert_not_awaited()
        stt.transcribe.assert_awaited_once()

    async def test_no_audio_is_no_speech(self, mic_channel, listener, mic, stt):
        mic.capture_until_silence.return_value = None
        await _run(mic_channel, listener)
        listener.on_error.assert_awaited_once_with(1, "no-speech")
        stt.transcribe.assert_not_awaited()

    async def test_empty_transcript_is_no_speech(self, mic_channel, listener, stt):
        stt.transcribe.return_value = ""
        await _run(mic_channel, listener)
        listener.on_error.assert_awaited_once_with(1, "no-speech")

    async def test_stt_failure_is_network_error(self, mic_channel, listener, stt):
        stt.transcribe.return_value = None
        await _run(mic_channel, listener)
        listener.on_error.assert_awaited_once_with(1, "network")

    async def test_device_error_is_audio_capture(self, mic_channel, listener, mic):
        mic.capture_until_silence.side_effect = OSError("Invalid device")
        await _run(mic_channel, listener)
        listener.on_error.assert_awaited_once_with(1, "audio-capture")

    async def test_session_id_passed_through(self, mic_channel, listener):
        await _run(mic_channel, listener, session_id=7)
        listener.on_result.assert_awaited_once_with(7, "Go to Algebra")

    async def test_listener_failure_is_contained(self, mic_channel, listener):
        listener.on_result.side_effect = RuntimeError("boom")
        await _run(mic_channel, listener)
        assert mic_channel.is_capturing is False


# ---------------------------------------------------------------------------
# stop / restart
# ---------------------------------------------------------------------------


class TestStop:

    async def test_stop_reports_end(self, mic_channel, listener, mic, stt):
        cancelled = asyncio.Event()
        mic.cancel = MagicMock(side_effect=cancelled.set)

        async def _wait_for_cancel(**kwargs):
            await cancelled.wait()
            return None

        mic.capture_until_silence.side_effect = _wait_for_cancel

        await mic_channel.start(1, listener)
        await asyncio.sleep(0)
        assert mic_channel.is_capturing is True

        await mic_channel.stop()
        await mic_channel._task

        mic.cancel.assert_called()
        listener.on_end.assert_awaited_once_with(1)
        listener.on_error.assert_not_awaited()
        stt.transcribe.assert_not_awaited()

    async def test_start_discards_previous_capture(self, mic_channel, mic):
        never = asyncio.Event()

        async def _hang(**kwargs):
            await never.wait()

        mic.capture_until_silence.side_effect = _hang
        first = AsyncMock(spec=RecognitionListener)
        await mic_channel.start(1, first)
        await asyncio.sleep(0)
        old_task = mic_channel._task

        mic.capture_until_silence.side_effect = None
        second = AsyncMock(spec=RecognitionListener)
        await _run(mic_channel, second, session_id=2)

        assert old_task.cancelled()
        first.on_result.assert_not_awaited()
        first.on_end.assert_not_awaited()
        second.on_result.assert_awaited_once_with(2, "Go to Algebra")
