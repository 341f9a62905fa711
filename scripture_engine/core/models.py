"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class Translation(str, Enum):
    """Translation slots carried by every merged verse."""

    KJV = "KJV"
    ESV = "ESV"
    NIV = "NIV"
    BSI_TELUGU = "BSI_TELUGU"


SECONDARY_LANGUAGE_KEY = Translation.BSI_TELUGU.value

# Translation slot -> display text. A missing secondary-language key means the
# line is not available for that verse.
VerseText = Dict[str, str]


class AnalysisKind(str, Enum):
    """On-demand verse analyses offered by the AI gateway."""

    CROSS_REFERENCES = "Cross-references"
    HISTORICAL_CONTEXT = "Historical Context"
    INTERLINEAR = "Interlinear"


class ChatMode(str, Enum):
    """Quality/cost tiers for the chat assistant."""

    FAST = "fast"
    STANDARD = "standard"
    DEEP_THOUGHT = "deep"


@dataclass(frozen=True, slots=True)
class BookMetadata:
    """Canonical book name with per-chapter verse counts (1-based chapters)."""

    name: str
    chapter_verse_counts: tuple[int, ...]
    abbreviation: str = ""

    @property
    def chapters(self) -> int:
        return len(self.chapter_verse_counts)

    def verse_count(self, chapter: int) -> int | None:
        """Return the number of verses in ``chapter`` or None when out of range."""
        if chapter < 1 or chapter > self.chapters:
            return None
        return self.chapter_verse_counts[chapter - 1]


class ParsedReference(BaseModel):
    """A structured reference extracted from free text.

    Bounds are not checked against ``BookMetadata`` at parse time; see
    ``ReferenceParser.validate``.
    """

    book: str
    chapter: int
    start_verse: int
    end_verse: Optional[int] = None

    @property
    def label(self) -> str:
        if self.end_verse is not None:
            return f"{self.book} {self.chapter}:{self.start_verse}-{self.end_verse}"
        return f"{self.book} {self.chapter}:{self.start_verse}"


class VerseRef(BaseModel):
    """A single verse address used to key analyses."""

    book: str
    chapter: int
    verse: int

    @property
    def label(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"


class MergedVerse(BaseModel):
    """Chapter-scoped verse with text for every available translation slot."""

    verse: int
    text: VerseText


class ReferenceVerse(BaseModel):
    """Reference-scoped verse used for multi-reference results."""

    book: str
    chapter: int
    verse: int
    text: VerseText


@dataclass(frozen=True, slots=True)
class SourceVerse:
    """One ``(verse-number, text)`` pair as returned by a translation source."""

    verse: int
    text: str


@dataclass(frozen=True, slots=True)
class SourcePassage:
    """A passage returned by the scripture-text collaborator for one translation."""

    reference: str
    verses: List[SourceVerse] = field(default_factory=list)
    translation_id: str = ""
    translation_name: str = ""


class ChatReply(BaseModel):
    """Assistant reply handed to the chat UI."""

    text: str
    sources: List[str] = []


__all__ = [
    "Translation",
    "SECONDARY_LANGUAGE_KEY",
    "VerseText",
    "AnalysisKind",
    "ChatMode",
    "BookMetadata",
    "ParsedReference",
    "VerseRef",
    "MergedVerse",
    "ReferenceVerse",
    "SourceVerse",
    "SourcePassage",
    "ChatReply",
]
