"""Resolve free-text book names and abbreviations to canonical book metadata."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from thefuzz import process

from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import BookMetadata
from scripture_engine.utils.books import build_abbreviation_index, load_book_metadata

logger = get_logger(__name__)

BOOK_NAME_VARIANTS: Dict[str, str] = {
    "song of songs": "Song of Solomon",
}

_SUGGESTION_SCORE_CUTOFF = 60


class BookMatcher:
    """First-match-wins resolution of book names.

    Order: exact canonical name, abbreviation (with and without internal
    whitespace), known variant, then the first canonical name in table order
    that starts with the query. There is no similarity scoring in
    :meth:`resolve`; :meth:`suggest` is a separate, advisory lookup.
    """

    def __init__(self, books: Optional[Sequence[BookMetadata]] = None) -> None:
        self._books: tuple[BookMetadata, ...] = tuple(books or load_book_metadata())
        self._by_name: Dict[str, BookMetadata] = {b.name: b for b in self._books}
        self._by_lower_name: Dict[str, BookMetadata] = {b.name.lower(): b for b in self._books}
        self._abbreviations = build_abbreviation_index(self._books)
        self._index: Dict[str, int] = {b.name: i for i, b in enumerate(self._books)}

    @property
    def books(self) -> tuple[BookMetadata, ...]:
        return self._books

    def get(self, name: str) -> BookMetadata | None:
        """Return metadata for an exact canonical name."""
        return self._by_name.get(name)

    def index_of(self, name: str) -> int | None:
        """Return the canonical order index (0 = Genesis) for ``name``."""
        return self._index.get(name)

    def resolve(self, query: str) -> BookMetadata | None:
        cleaned = query.strip().lower()
        if not cleaned:
            return None
        cleaned_no_space = "".join(cleaned.split())

        exact = self._by_lower_name.get(cleaned)
        if exact is not None:
            return exact

        abbr_name = self._abbreviations.get(cleaned_no_space) or self._abbreviations.get(cleaned)
        if abbr_name and abbr_name in self._by_name:
            return self._by_name[abbr_name]

        variant = BOOK_NAME_VARIANTS.get(cleaned)
        if variant is not None:
            return self._by_name.get(variant)

        for book in self._books:
            if book.name.lower().startswith(cleaned):
                return book

        return None

    def suggest(self, query: str, limit: int = 3) -> list[str]:
        """Return canonical names that look similar to ``query``, best first."""
        cleaned = query.strip()
        if not cleaned:
            return []
        matches = process.extract(cleaned, [b.name for b in self._books], limit=limit)
        suggestions = [name for name, score in matches if score >= _SUGGESTION_SCORE_CUTOFF]
        logger.debug("[book-matcher] suggestions for %r: %s", cleaned, suggestions)
        return suggestions


__all__ = ["BookMatcher", "BOOK_NAME_VARIANTS"]
