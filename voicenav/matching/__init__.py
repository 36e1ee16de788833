"""Approximate phrase matching of transcripts against the command catalog."""

from voicenav.matching.command_index import CommandIndex
from voicenav.matching.fuzzy_matcher import FuzzyMatcher
from voicenav.matching.text_matcher import TextMatcher
from voicenav.matching.types import NO_MATCH, IndexedPhrase, MatcherHandle, MatchResult

__all__ = [
    "CommandIndex",
    "FuzzyMatcher",
    "IndexedPhrase",
    "MatchResult",
    "MatcherHandle",
    "NO_MATCH",
    "TextMatcher",
]
