"""Chapter and reference fetches backed by two translation families."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from scripture_engine.core.config import config
from scripture_engine.core.exceptions import NoVersesFoundError, ScriptureFetchError
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import (
    MergedVerse,
    ParsedReference,
    ReferenceVerse,
    SourcePassage,
)
from scripture_engine.core.ports import ScriptureSourcePort
from scripture_engine.services.reference_parser import format_reference
from scripture_engine.services.verse_merger import VerseMerger

logger = get_logger(__name__)


class ScriptureService:
    """Fetch scripture text and merge translations into per-verse records.

    Every fetch issues the primary and secondary translation requests
    concurrently and joins both before merging. Only the primary translation
    is authoritative: a failed secondary request degrades to primary text,
    while a failed primary request fails the whole fetch.
    """

    def __init__(
        self,
        source: ScriptureSourcePort,
        merger: Optional[VerseMerger] = None,
        primary_translation: Optional[str] = None,
        secondary_translation: Optional[str] = None,
    ) -> None:
        self._source = source
        self._merger = merger or VerseMerger()
        self._primary = primary_translation or config.PRIMARY_TRANSLATION
        self._secondary = secondary_translation or config.SECONDARY_TRANSLATION

    async def _fetch_secondary(self, reference: str) -> SourcePassage:
        try:
            return await self._source.fetch_passage(reference, self._secondary)
        except ScriptureFetchError as exc:
            logger.warning(
                "[scripture] %s unavailable for %s, using %s text: %s",
                self._secondary,
                reference,
                self._primary,
                exc,
            )
            return SourcePassage(reference=reference, translation_id=self._secondary)

    async def _fetch_pair(self, reference: str) -> tuple[SourcePassage, SourcePassage]:
        secondary, primary = await asyncio.gather(
            self._fetch_secondary(reference),
            self._source.fetch_passage(reference, self._primary),
        )
        return primary, secondary

    async def fetch_chapter(self, book: str, chapter: int) -> list[MergedVerse]:
        """Return every verse of ``book chapter``.

        Raises NoVersesFoundError when the primary translation has no verses
        and ScriptureFetchError when the primary request fails.
        """
        label = f"{book} {chapter}"
        try:
            primary, secondary = await self._fetch_pair(label)
            verses = self._merger.merge_chapter(primary.verses, secondary.verses, book, chapter)
        except Exception:
            logger.error("[scripture] failed to fetch chapter %s", label, exc_info=True)
            raise
        logger.info("[scripture] merged %d verse(s) for %s", len(verses), label)
        return verses

    async def _fetch_reference(self, reference: ParsedReference) -> list[ReferenceVerse]:
        label = format_reference(reference)
        primary, secondary = await self._fetch_pair(label)
        try:
            return self._merger.merge_reference(
                primary.verses, secondary.verses, reference.book, reference.chapter, label
            )
        except NoVersesFoundError:
            logger.warning("[scripture] no primary verses found for %s", label)
            return []

    async def fetch_references(
        self, references: Sequence[ParsedReference]
    ) -> list[ReferenceVerse]:
        """Fetch several references concurrently, preserving reference order.

        A reference with no primary verses contributes nothing; a failed
        primary request fails the whole operation.
        """
        if not references:
            return []
        results = await asyncio.gather(*(self._fetch_reference(ref) for ref in references))
        merged = [verse for group in results for verse in group]
        logger.info(
            "[scripture] fetched %d verse(s) for %d reference(s)", len(merged), len(references)
        )
        return merged


__all__ = ["ScriptureService"]
