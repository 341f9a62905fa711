"""Secondary-language verse corpus loaded from a nested JSON file.

Expected shape (book order matches the canonical book table)::

    {"Book": [{"Chapter": [{"Verse": [{"Verseid": "...", "Verse": "..."}]}]}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from scripture_engine.core.logging import get_logger

logger = get_logger(__name__)


def _child(node: Any, key: str, index: int) -> Any:
    """Return ``node[key][index]`` or None when any level is missing."""
    if not isinstance(node, Mapping):
        return None
    items = node.get(key)
    if not isinstance(items, list) or index < 0 or index >= len(items):
        return None
    return items[index]


class JsonVerseCorpus:
    """Read-only, pre-indexed ``[book][chapter][verse]`` lookup."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Mapping[str, Any] = data or {"Book": []}

    @classmethod
    def from_path(cls, path: Optional[Path]) -> "JsonVerseCorpus":
        """Load the corpus from ``path``; a missing path yields an empty corpus."""
        if path is None:
            logger.info("[corpus] no secondary-language corpus configured")
            return cls()
        if not path.exists():
            logger.warning("[corpus] secondary-language corpus not found at %s", path)
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        logger.info("[corpus] loaded %d book(s) from %s", len(data.get("Book", [])), path)
        return cls(data)

    def lookup(self, book_index: int, chapter_index: int, verse_index: int) -> str | None:
        chapter = _child(_child(self._data, "Book", book_index), "Chapter", chapter_index)
        verse = _child(chapter, "Verse", verse_index)
        if not isinstance(verse, Mapping):
            return None
        text = verse.get("Verse")
        return text if isinstance(text, str) else None


__all__ = ["JsonVerseCorpus"]
