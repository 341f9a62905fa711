"""Search-box orchestration: references, navigation, or AI keyword search."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from scripture_engine.core.exceptions import ScriptureEngineError
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import ParsedReference, ReferenceVerse, VerseRef
from scripture_engine.services.ai_gateway import AIGateway
from scripture_engine.services.reference_parser import REFERENCE_PATTERN, ReferenceParser
from scripture_engine.services.scripture_service import ScriptureService

logger = get_logger(__name__)


class SearchOutcomeKind(str, Enum):
    """What the reader should do with a search result."""

    REFERENCES = "references"
    NAVIGATE = "navigate"
    KEYWORD = "keyword"
    ERROR = "error"


class SearchOutcome(BaseModel):
    """Result of one search-box submission."""

    kind: SearchOutcomeKind
    query: str
    references: List[ParsedReference] = []
    verses: List[ReferenceVerse] = []
    navigate_to: Optional[VerseRef] = None
    error: Optional[str] = None
    suggestions: List[str] = []


class SearchService:
    """Interpret a search query the way the reader's search box does.

    - several references: fetch and display them together;
    - exactly one: validate the chapter and navigate to it;
    - none: ask the AI for related references, then fetch those.
    """

    def __init__(
        self,
        parser: ReferenceParser,
        scripture: ScriptureService,
        gateway: AIGateway,
    ) -> None:
        self._parser = parser
        self._scripture = scripture
        self._gateway = gateway

    def _error(self, query: str, message: str, **extra) -> SearchOutcome:
        logger.info("[search] %s", message)
        return SearchOutcome(kind=SearchOutcomeKind.ERROR, query=query, error=message, **extra)

    def _suggestions_for(self, query: str) -> list[str]:
        match = REFERENCE_PATTERN.search(query)
        if not match:
            return []
        return self._parser.book_matcher.suggest(match.group(1))

    async def search(self, query: str) -> SearchOutcome:
        query = query.strip()
        if not query:
            return self._error(query, "Enter a reference or keyword to search.")

        references = self._parser.parse(query)
        if len(references) > 1:
            return await self._show_references(query, references)
        if len(references) == 1:
            return self._navigate(query, references[0])
        return await self._keyword_search(query)

    async def _show_references(
        self, query: str, references: list[ParsedReference]
    ) -> SearchOutcome:
        try:
            verses = await self._scripture.fetch_references(references)
        except ScriptureEngineError:
            logger.error("[search] reference fetch failed for %r", query, exc_info=True)
            return self._error(query, "Failed to fetch results.", references=references)
        return SearchOutcome(
            kind=SearchOutcomeKind.REFERENCES, query=query, references=references, verses=verses
        )

    def _navigate(self, query: str, reference: ParsedReference) -> SearchOutcome:
        book = self._parser.book_matcher.get(reference.book)
        if book is None or book.verse_count(reference.chapter) is None:
            return self._error(
                query, f"Invalid chapter for {reference.book}.", references=[reference]
            )
        return SearchOutcome(
            kind=SearchOutcomeKind.NAVIGATE,
            query=query,
            references=[reference],
            navigate_to=VerseRef(
                book=reference.book, chapter=reference.chapter, verse=reference.start_verse
            ),
        )

    async def _keyword_search(self, query: str) -> SearchOutcome:
        suggestions = self._suggestions_for(query)
        reference_string = await self._gateway.keyword_search(query)
        if not reference_string.strip():
            return self._error(
                query, f'No verses found for "{query}".', suggestions=suggestions
            )

        references = self._parser.parse(reference_string)
        if not references:
            return self._error(
                query, f'Could not parse results for "{query}".', suggestions=suggestions
            )

        try:
            verses = await self._scripture.fetch_references(references)
        except ScriptureEngineError:
            logger.error("[search] keyword result fetch failed for %r", query, exc_info=True)
            return self._error(
                query, "An error occurred during keyword search.", references=references
            )
        logger.info("[search] keyword %r -> %d reference(s)", query, len(references))
        return SearchOutcome(
            kind=SearchOutcomeKind.KEYWORD, query=query, references=references, verses=verses
        )


__all__ = ["SearchOutcome", "SearchOutcomeKind", "SearchService"]
