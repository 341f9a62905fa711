"""Static book reference data: canonical names, abbreviations, verse counts.

The table under ``scripture_engine/data/book_metadata.json`` lists the 66
books in canonical order (Genesis → Revelation). Its index is the book index
used by the secondary-language corpus.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Tuple

from scripture_engine.core.models import BookMetadata

_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "book_metadata.json"


@lru_cache(maxsize=4)
def load_book_metadata(path: Path = _DATA_PATH) -> Tuple[BookMetadata, ...]:
    """Load the canonical book table (cached, read-only)."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    books = []
    for entry in raw:
        counts = tuple(int(n) for n in entry["chapter_verse_counts"])
        books.append(
            BookMetadata(
                name=entry["name"],
                chapter_verse_counts=counts,
                abbreviation=entry.get("abbreviation", ""),
            )
        )
    return tuple(books)


def build_abbreviation_index(books: Tuple[BookMetadata, ...]) -> Dict[str, str]:
    """Map lower-cased abbreviations to canonical names.

    Each abbreviation is keyed both as written (``"1 sam"``) and with internal
    whitespace removed (``"1sam"``).
    """
    index: Dict[str, str] = {}
    for book in books:
        if not book.abbreviation:
            continue
        abbr = book.abbreviation.lower()
        index["".join(abbr.split())] = book.name
        index[abbr] = book.name
    return index


__all__ = ["load_book_metadata", "build_abbreviation_index"]
