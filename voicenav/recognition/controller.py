"""Recognition session state machine.

::

    idle --toggle/start--> listening --on_result--> finalizing --> idle
                               |      --on_error---> erroring ---> idle
                               |      --on_end-----------------> idle
                               +------toggle/stop--------------> idle

At most one session is open. Each session gets a new id from a
monotonically increasing counter; callbacks carrying any other id are
stale and ignored. ``stop()`` moves to idle immediately instead of waiting
for the channel to confirm, so a channel that never calls back cannot
leave the toggle stuck in listening.
"""

import logging

from voicenav.executor import CommandExecutor, ExecutionOutcome
from voicenav.feedback import notices
from voicenav.matching.command_index import CommandIndex
from voicenav.recognition.channel import RecognitionListener, SpeechChannel
from voicenav.recognition.types import (
    RecognitionErrorKind,
    SessionState,
    classify_error,
)

logger = logging.getLogger(__name__)

_ERROR_NOTICES = {
    RecognitionErrorKind.PERMISSION_DENIED: notices.permission_denied,
    RecognitionErrorKind.NO_MICROPHONE: notices.no_microphone,
    RecognitionErrorKind.OTHER: notices.recognition_error,
}


class RecognitionController(RecognitionListener):
    """Drives one SpeechChannel and hands finalized transcripts to the executor."""

    def __init__(
        self,
        channel: SpeechChannel,
        index: CommandIndex,
        executor: CommandExecutor,
    ) -> None:
        self._channel = channel
        self._index = index
        self._executor = executor
        self._state: SessionState = SessionState.IDLE
        self._session_counter: int = 0
        self._active_session: int | None = None
        self._supported: bool | None = None
        self._last_outcome: ExecutionOutcome | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state == SessionState.LISTENING

    @property
    def is_supported(self) -> bool:
        """Capture capability as detected by ``detect_support()``.

        Before detection runs, the channel is asked directly.
        """
        if self._supported is None:
            return self._channel.is_supported
        return self._supported

    @property
    def session_id(self) -> int | None:
        """Id of the open session, or None when idle."""
        return self._active_session

    @property
    def last_outcome(self) -> ExecutionOutcome | None:
        return self._last_outcome

    def detect_support(self) -> bool:
        """Record whether the channel can capture. Called once at mount."""
        self._supported = self._channel.is_supported
        if not self._supported:
            logger.warning("Speech capture unsupported, voice toggle disabled")
        return self._supported

    # ------------------------------------------------------------------
    # User affordance
    # ------------------------------------------------------------------

    async def toggle(self) -> SessionState:
        """Start listening when idle, stop when listening."""
        if not self.is_supported:
            await self._executor.notify(notices.unsupported_environment())
            return self._state

        if self._state == SessionState.LISTENING:
            await self.stop()
        elif self._state == SessionState.IDLE:
            await self.start()
        else:
            logger.debug("Toggle ignored while %s", self._state.value)
        return self._state

    async def start(self) -> None:
        """Open a capture session. No-op unless idle."""
        if self._state != SessionState.IDLE:
            logger.debug("Start ignored while %s", self._state.value)
            return
        if not self.is_supported:
            logger.debug("Start ignored, capture unsupported")
            return

        self._session_counter += 1
        session_id = self._session_counter
        self._active_session = session_id
        self._state = SessionState.LISTENING
        logger.info("Listening (session %d)", session_id)

        try:
            await self._channel.start(session_id, self)
        except Exception:
            logger.warning("Could not start recognition", exc_info=True)
            if self._active_session == session_id:
                self._close_session()
                await self._executor.notify(notices.start_failed())

    async def stop(self) -> None:
        """Stop the open session. No-op unless listening."""
        if self._state != SessionState.LISTENING:
            return

        session_id = self._active_session
        self._close_session()
        logger.info("Stopped listening (session %s)", session_id)
        try:
            await self._channel.stop()
        except Exception:
            logger.warning("Channel stop failed", exc_info=True)

    # ------------------------------------------------------------------
    # Channel callbacks
    # ------------------------------------------------------------------

    async def on_result(self, session_id: int, transcript: str) -> None:
        if not self._accepts(session_id, "result"):
            return

        self._state = SessionState.FINALIZING
        heard = transcript.strip().lower()
        logger.info("Transcript for session %d: %r", session_id, heard)
        try:
            results = self._index.query(heard)
            self._last_outcome = await self._executor.execute(results, heard)
        except Exception:
            logger.warning(
                "Handling transcript failed for session %d", session_id, exc_info=True
            )
        finally:
            self._close_session()

    async def on_error(self, session_id: int, code: str) -> None:
        if not self._accepts(session_id, "error"):
            return

        self._state = SessionState.ERRORING
        kind = classify_error(code)
        logger.info("Recognition error in session %d: %s (%s)", session_id, code, kind.value)
        try:
            notice_factory = _ERROR_NOTICES.get(kind)
            if notice_factory is not None:
                await self._executor.notify(notice_factory())
        finally:
            self._close_session()

    async def on_end(self, session_id: int) -> None:
        if not self._accepts(session_id, "end"):
            return
        logger.debug("Session %d ended without a result", session_id)
        self._close_session()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts(self, session_id: int, callback: str) -> bool:
        if self._state != SessionState.LISTENING or session_id != self._active_session:
            logger.debug(
                "Ignoring stale %s for session %d (active=%s, state=%s)",
                callback,
                session_id,
                self._active_session,
                self._state.value,
            )
            return False
        return True

    def _close_session(self) -> None:
        self._active_session = None
        self._state = SessionState.IDLE
