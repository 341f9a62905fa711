"""Best-effort extraction of scripture references from free text.

Handles the forms typed into the reader's search box:
- single reference: "John 3:16"
- verse range: "Romans 8:28-30"
- several references separated by commas or semicolons: "John 3:16; Rom 8:28"
- numbered books and abbreviations: "1 Sam 3:4", "1Sam 3:4"

Segments that do not look like a reference, or whose book does not resolve,
are dropped silently. An empty result tells the caller to fall back to a
keyword search.
"""

from __future__ import annotations

import re
from typing import Optional

from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import ParsedReference
from scripture_engine.services.book_matcher import BookMatcher

logger = get_logger(__name__)

REFERENCE_PATTERN = re.compile(r"((\d\s*)?[a-zA-Z\s]+)\s+(\d+):(\d+)(?:-(\d+))?", re.IGNORECASE)
SEGMENT_SEPARATORS = re.compile(r"[,;]")


class ReferenceParser:
    """Turn free text into an ordered list of :class:`ParsedReference`."""

    def __init__(self, book_matcher: Optional[BookMatcher] = None) -> None:
        self._books = book_matcher or BookMatcher()

    @property
    def book_matcher(self) -> BookMatcher:
        return self._books

    def parse(self, text: str) -> list[ParsedReference]:
        """Parse ``text``; output follows input order with no deduplication.

        A range whose end precedes its start is kept as written.
        """
        references: list[ParsedReference] = []
        for segment in SEGMENT_SEPARATORS.split(text or ""):
            part = segment.strip()
            if not part:
                continue
            match = REFERENCE_PATTERN.search(part)
            if not match:
                continue
            book = self._books.resolve(match.group(1).strip())
            if book is None:
                logger.debug("[reference-parser] unknown book token in %r", part)
                continue
            references.append(
                ParsedReference(
                    book=book.name,
                    chapter=int(match.group(3)),
                    start_verse=int(match.group(4)),
                    end_verse=int(match.group(5)) if match.group(5) else None,
                )
            )
        return references

    def validate(self, reference: ParsedReference) -> str | None:
        """Check ``reference`` against the book's chapter and verse counts.

        Returns a human-readable problem, or ``None`` when the reference is in
        range. Parsing never calls this; consumers decide when to validate.
        """
        book = self._books.get(reference.book)
        if book is None:
            return f"Unknown book {reference.book}."
        verse_count = book.verse_count(reference.chapter)
        if verse_count is None:
            return f"Invalid chapter for {reference.book}."
        if reference.start_verse < 1 or reference.start_verse > verse_count:
            return f"Invalid verse for {reference.book} {reference.chapter}."
        return None


def format_reference(reference: ParsedReference) -> str:
    """Render the fetch label for ``reference`` ("Book C:V" or "Book C:V-W")."""
    return reference.label


__all__ = ["ReferenceParser", "REFERENCE_PATTERN", "format_reference"]
