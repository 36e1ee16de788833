"""Acts on match results: navigate and confirm, or report the miss.

Both branches speak (fire-and-forget) and publish a notice. Nothing raised
by a collaborator escapes ``execute()``; the outcome is always returned.
"""

import logging
from enum import Enum

from pydantic import BaseModel

from voicenav.catalog.types import Command
from voicenav.config import ACCEPTANCE_THRESHOLD
from voicenav.events.event_bus import EventBus
from voicenav.events.types import Notice
from voicenav.feedback import notices
from voicenav.feedback.synthesizer import SpeechSynthesizer
from voicenav.matching.types import NO_MATCH, MatchResult
from voicenav.navigation import Navigator

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    EXECUTED = "executed"
    REJECTED = "rejected"


class ExecutionOutcome(BaseModel):
    """What the executor did with one transcript."""

    status: OutcomeStatus
    transcript: str
    command: Command | None = None
    score: float | None = None

    @property
    def executed(self) -> bool:
        return self.status == OutcomeStatus.EXECUTED


class CommandExecutor:
    """Executes the top match if it clears the acceptance threshold."""

    def __init__(
        self,
        navigator: Navigator,
        synthesizer: SpeechSynthesizer,
        notice_bus: EventBus[Notice] | None = None,
        *,
        acceptance_threshold: float = ACCEPTANCE_THRESHOLD,
    ) -> None:
        self._navigator = navigator
        self._synthesizer = synthesizer
        self._notice_bus = notice_bus
        self._acceptance_threshold = acceptance_threshold

    @property
    def acceptance_threshold(self) -> float:
        return self._acceptance_threshold

    async def execute(
        self,
        results: list[MatchResult],
        transcript: str,
        acceptance_threshold: float | None = None,
    ) -> ExecutionOutcome:
        """Navigate to the best match, or reject *transcript*.

        The best result is executed only if it has a command and its score
        is strictly below the acceptance threshold.
        """
        threshold = (
            self._acceptance_threshold
            if acceptance_threshold is None
            else acceptance_threshold
        )
        best = results[0] if results else NO_MATCH

        if best.command is not None and best.score < threshold:
            await self._accept(best.command, best.score)
            return ExecutionOutcome(
                status=OutcomeStatus.EXECUTED,
                transcript=transcript,
                command=best.command,
                score=best.score,
            )

        await self._reject(transcript, best.score if best.command else None)
        return ExecutionOutcome(
            status=OutcomeStatus.REJECTED,
            transcript=transcript,
            score=best.score if best.command else None,
        )

    async def _accept(self, command: Command, score: float) -> None:
        logger.info(
            "Executing %r -> %s (score=%.3f)", command.phrase, command.action, score
        )
        self._say(command.feedback_text)
        await self.notify(notices.command_recognized(command.feedback_text))
        try:
            await self._navigator.navigate(command.action, command.feedback_text)
        except Exception:
            logger.warning("Navigation to %s failed", command.action, exc_info=True)

    async def _reject(self, transcript: str, score: float | None) -> None:
        logger.info("No command matched %r (best score=%s)", transcript, score)
        self._say(notices.NOT_RECOGNIZED_SPEECH)
        await self.notify(notices.command_not_recognized(transcript))

    def _say(self, text: str) -> None:
        try:
            self._synthesizer.speak(text)
        except Exception:
            logger.warning("Speech synthesis failed", exc_info=True)

    async def notify(self, notice: Notice) -> None:
        """Publish *notice* for the UI; failures are logged, never raised."""
        if self._notice_bus is None:
            logger.info("Notice: %s - %s", notice.title, notice.description)
            return
        try:
            await self._notice_bus.emit(notice)
        except Exception:
            logger.warning("Failed to publish notice %s", notice.kind.value, exc_info=True)
