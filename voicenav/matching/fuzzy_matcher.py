"""Token-aligned fuzzy matching of transcripts to command phrases.

Each token of the transcript is paired with its most similar phrase token
(and vice versa) using SequenceMatcher, so word order does not matter and
small recognition slips ("algebr", "achievement") still count. Token pairs
below the token floor are treated as unrelated. The two coverage values are
combined as an F1 score and the result is reported as ``1 - F1``.
"""

from __future__ import annotations

import logging
import re
from difflib import SequenceMatcher

from voicenav.catalog.types import Catalog
from voicenav.config import SEARCH_THRESHOLD, TOKEN_FLOOR
from voicenav.matching.text_matcher import TextMatcher
from voicenav.matching.types import IndexedPhrase, MatcherHandle, MatchResult

logger = logging.getLogger(__name__)

# Unicode letters and digits; an apostrophe only joins two word parts ("didn't").
_TOKEN_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def tokenize(text: str) -> tuple[str, ...]:
    """Casefold *text* and split it into word tokens, dropping punctuation."""
    return tuple(_TOKEN_RE.findall(text.casefold()))


class FuzzyMatcher(TextMatcher):
    """Case-insensitive approximate matcher over the ``phrase`` field."""

    def __init__(
        self,
        search_threshold: float = SEARCH_THRESHOLD,
        token_floor: float = TOKEN_FLOOR,
    ) -> None:
        self._search_threshold = search_threshold
        self._token_floor = token_floor

    @property
    def search_threshold(self) -> float:
        return self._search_threshold

    @property
    def token_floor(self) -> float:
        return self._token_floor

    def index(self, catalog: Catalog) -> MatcherHandle:
        entries = tuple(
            IndexedPhrase(position=position, tokens=tokenize(command.phrase))
            for position, command in enumerate(catalog.commands)
        )
        return MatcherHandle(catalog=catalog, entries=entries)

    def query(self, handle: MatcherHandle, transcript: str) -> list[MatchResult]:
        heard = tokenize(transcript)
        if not heard:
            return []

        # Phrases share most of their tokens ("open", "go", "to"), so token
        # similarities are computed once per query.
        cache: dict[tuple[str, str], float] = {}
        scored: list[tuple[float, int]] = []
        for entry in handle.entries:
            if not entry.tokens:
                continue
            score = self.score(heard, entry.tokens, cache)
            if score <= self._search_threshold:
                scored.append((score, entry.position))

        # list.sort is stable, so equal scores keep catalog order.
        scored.sort(key=lambda item: item[0])
        commands = handle.catalog.commands
        return [
            MatchResult(command=commands[position], score=score)
            for score, position in scored
        ]

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        heard: tuple[str, ...],
        phrase: tuple[str, ...],
        cache: dict[tuple[str, str], float] | None = None,
    ) -> float:
        """Return the dissimilarity between two token sequences (0.0 = equal)."""
        if cache is None:
            cache = {}
        precision = self._coverage(heard, phrase, cache)
        if precision == 0.0:
            return 1.0
        recall = self._coverage(phrase, heard, cache)
        if recall == 0.0:
            return 1.0
        f1 = 2 * precision * recall / (precision + recall)
        return max(0.0, 1.0 - f1)

    def _coverage(
        self,
        source: tuple[str, ...],
        target: tuple[str, ...],
        cache: dict[tuple[str, str], float],
    ) -> float:
        """Length-weighted share of *source* tokens found in *target*."""
        total = 0
        covered = 0.0
        for token in source:
            weight = len(token)
            total += weight
            covered += weight * max(
                self._token_similarity(token, other, cache) for other in target
            )
        return covered / total if total else 0.0

    def _token_similarity(
        self, a: str, b: str, cache: dict[tuple[str, str], float]
    ) -> float:
        if a == b:
            return 1.0
        key = (a, b) if a < b else (b, a)
        cached = cache.get(key)
        if cached is not None:
            return cached

        matcher = SequenceMatcher(None, key[0], key[1])
        floor = self._token_floor
        # Cheap upper bounds first; ratio() is the expensive call.
        if matcher.real_quick_ratio() < floor or matcher.quick_ratio() < floor:
            similarity = 0.0
        else:
            ratio = matcher.ratio()
            similarity = ratio if ratio >= floor else 0.0

        cache[key] = similarity
        return similarity
