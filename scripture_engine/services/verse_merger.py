"""Merge per-verse text from independent translation sources into one record."""

from __future__ import annotations

from typing import Optional, Sequence

from scripture_engine.core.exceptions import NoVersesFoundError
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import (
    SECONDARY_LANGUAGE_KEY,
    MergedVerse,
    ReferenceVerse,
    SourceVerse,
    Translation,
    VerseText,
)
from scripture_engine.core.ports import VerseCorpusPort
from scripture_engine.services.book_matcher import BookMatcher
from scripture_engine.utils.text_utils import normalize_verse_text

logger = get_logger(__name__)


class VerseMerger:
    """Combine the primary translation, the secondary translation and the
    secondary-language corpus into one :data:`VerseText` per verse.

    The primary source is authoritative for which verses exist. A verse missing
    from the secondary source falls back to the primary text; a verse missing
    from the corpus simply has no secondary-language entry.
    """

    def __init__(
        self,
        corpus: Optional[VerseCorpusPort] = None,
        book_matcher: Optional[BookMatcher] = None,
    ) -> None:
        self._corpus = corpus
        self._books = book_matcher or BookMatcher()

    def secondary_language_line(self, book: str, chapter: int, verse: int) -> str | None:
        """Return the corpus line for a verse, or None on any structural miss."""
        if self._corpus is None:
            return None
        book_index = self._books.index_of(book)
        if book_index is None:
            return None
        return self._corpus.lookup(book_index, chapter - 1, verse - 1)

    def _verse_text(
        self,
        primary: SourceVerse,
        secondary_by_number: dict[int, SourceVerse],
        book: str,
        chapter: int,
    ) -> VerseText:
        primary_text = normalize_verse_text(primary.text)
        secondary = secondary_by_number.get(primary.verse)
        secondary_text = normalize_verse_text(secondary.text) if secondary else primary_text

        text: VerseText = {
            Translation.KJV.value: primary_text,
            Translation.ESV.value: secondary_text,
            Translation.NIV.value: secondary_text,
        }
        line = self.secondary_language_line(book, chapter, primary.verse)
        if line:
            text[SECONDARY_LANGUAGE_KEY] = line
        return text

    def _iter_merged(
        self,
        primary: Sequence[SourceVerse],
        secondary: Sequence[SourceVerse],
        book: str,
        chapter: int,
        label: str,
    ):
        if not primary:
            raise NoVersesFoundError(f"No {Translation.KJV.value} verses found for {label}")
        # First occurrence wins when a source repeats a verse number.
        secondary_by_number: dict[int, SourceVerse] = {}
        for verse in secondary:
            secondary_by_number.setdefault(verse.verse, verse)
        missing = [v.verse for v in primary if v.verse not in secondary_by_number]
        if missing:
            logger.info("[verse-merger] %s: secondary text missing for verses %s", label, missing)
        for verse in primary:
            yield verse.verse, self._verse_text(verse, secondary_by_number, book, chapter)

    def merge_chapter(
        self,
        primary: Sequence[SourceVerse],
        secondary: Sequence[SourceVerse],
        book: str,
        chapter: int,
    ) -> list[MergedVerse]:
        """Merge a whole chapter. Raises NoVersesFoundError on an empty primary."""
        label = f"{book} {chapter}"
        return [
            MergedVerse(verse=number, text=text)
            for number, text in self._iter_merged(primary, secondary, book, chapter, label)
        ]

    def merge_reference(
        self,
        primary: Sequence[SourceVerse],
        secondary: Sequence[SourceVerse],
        book: str,
        chapter: int,
        label: str | None = None,
    ) -> list[ReferenceVerse]:
        """Merge the verses of one reference, tagging each with book and chapter."""
        label = label or f"{book} {chapter}"
        return [
            ReferenceVerse(book=book, chapter=chapter, verse=number, text=text)
            for number, text in self._iter_merged(primary, secondary, book, chapter, label)
        ]


__all__ = ["VerseMerger"]
