"""Abstract base class for transcript-to-command matchers.

The recognition controller only talks to this interface, so any
approximate string matching algorithm can be swapped in without touching
the state machine.
"""

from abc import ABC, abstractmethod

from voicenav.catalog.types import Catalog
from voicenav.matching.types import MatcherHandle, MatchResult


class TextMatcher(ABC):
    """Indexes a catalog and ranks its commands against a transcript.

    Handles returned by ``index()`` are immutable; ``query()`` must not
    modify them, so concurrent queries against one handle are safe.
    """

    @abstractmethod
    def index(self, catalog: Catalog) -> MatcherHandle:
        """Build a lookup handle for *catalog*. Runs in O(len(catalog))."""

    @abstractmethod
    def query(self, handle: MatcherHandle, transcript: str) -> list[MatchResult]:
        """Return matches for *transcript*, best (lowest score) first.

        Equal scores keep catalog order. Candidates scoring above the
        matcher's search threshold are omitted.
        """

    @property
    @abstractmethod
    def search_threshold(self) -> float:
        """Maximum score a candidate may have to be returned by ``query()``."""
