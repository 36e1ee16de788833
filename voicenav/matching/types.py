"""Pydantic models for match results and matcher indexes."""

from pydantic import BaseModel, ConfigDict

from voicenav.catalog.types import Catalog, Command


class MatchResult(BaseModel):
    """One ranked candidate for a transcript.

    ``score`` is a dissimilarity in ``[0, 1]``: 0.0 is an exact match.
    A ``None`` command means no adequate match was found.
    """

    model_config = ConfigDict(frozen=True)

    command: Command | None
    score: float

    @property
    def matched(self) -> bool:
        return self.command is not None


NO_MATCH = MatchResult(command=None, score=1.0)


class IndexedPhrase(BaseModel):
    """A catalog phrase split into lookup tokens."""

    model_config = ConfigDict(frozen=True)

    position: int
    tokens: tuple[str, ...]


class MatcherHandle(BaseModel):
    """Read-only index over a catalog, produced by ``TextMatcher.index``."""

    model_config = ConfigDict(frozen=True)

    catalog: Catalog
    entries: tuple[IndexedPhrase, ...] = ()
