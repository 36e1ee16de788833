"""Holds the current catalog and its matcher handle behind one reference."""

import logging
from collections.abc import Iterable

from voicenav.catalog.builder import build_catalog
from voicenav.catalog.types import Catalog, DynamicEntity, Role
from voicenav.matching.text_matcher import TextMatcher
from voicenav.matching.types import MatcherHandle, MatchResult

logger = logging.getLogger(__name__)


class CommandIndex:
    """Swap-on-rebuild container for ``(catalog, handle)``.

    ``rebuild()`` builds the new catalog and its handle completely before
    replacing ``_snapshot`` in a single assignment, so a query either sees
    the old pair or the new one, never a mix. Old handles are dropped.
    """

    def __init__(
        self,
        matcher: TextMatcher,
        role: Role | str,
        entities: Iterable[DynamicEntity] = (),
    ) -> None:
        self._matcher = matcher
        self._snapshot: tuple[Catalog, MatcherHandle] = self._build(role, entities)

    def _build(
        self, role: Role | str, entities: Iterable[DynamicEntity]
    ) -> tuple[Catalog, MatcherHandle]:
        catalog = build_catalog(role, entities)
        return catalog, self._matcher.index(catalog)

    def rebuild(
        self, role: Role | str, entities: Iterable[DynamicEntity] = ()
    ) -> Catalog:
        """Replace the catalog with one built for *role* and *entities*."""
        snapshot = self._build(role, entities)
        self._snapshot = snapshot
        logger.info(
            "Command catalog rebuilt for %s (%d commands)",
            snapshot[0].role.value,
            len(snapshot[0]),
        )
        return snapshot[0]

    @property
    def matcher(self) -> TextMatcher:
        return self._matcher

    @property
    def catalog(self) -> Catalog:
        return self._snapshot[0]

    @property
    def handle(self) -> MatcherHandle:
        return self._snapshot[1]

    @property
    def role(self) -> Role:
        return self._snapshot[0].role

    def query(self, transcript: str) -> list[MatchResult]:
        """Rank the current catalog against *transcript*."""
        _catalog, handle = self._snapshot
        return self._matcher.query(handle, transcript)
