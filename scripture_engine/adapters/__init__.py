"""Infrastructure adapter exports."""

from scripture_engine.core.exceptions import ScriptureFetchError  # noqa: F401

from .bible_api import BibleApiAdapter
from .verse_corpus import JsonVerseCorpus

__all__ = [
    "BibleApiAdapter",
    "JsonVerseCorpus",
    "ScriptureFetchError",
]
