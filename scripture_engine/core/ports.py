"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Protocol

from scripture_engine.core.models import SourcePassage


class ScriptureSourcePort(Protocol):
    """Port exposing the remote scripture-text endpoint."""

    async def fetch_passage(self, reference: str, translation: str) -> SourcePassage:
        """Return the verses of ``reference`` (e.g. ``"John 3"``) in ``translation``.

        Any non-success response must raise ``ScriptureFetchError``.
        """
        ...


class VerseCorpusPort(Protocol):
    """Port exposing the pre-loaded secondary-language corpus."""

    def lookup(self, book_index: int, chapter_index: int, verse_index: int) -> str | None:
        """Return the verse text at the zero-based triple, or ``None`` when absent."""
        ...


__all__ = ["ScriptureSourcePort", "VerseCorpusPort"]
