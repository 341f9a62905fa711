"""Reference resolution and passage retrieval endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from scripture_engine.apps.api.dependencies import get_scripture_service, get_service_container
from scripture_engine.core.api_models import (
    BookResponse,
    ChapterResponse,
    PassagesRequest,
    PassagesResponse,
    ResolveReferencesResponse,
    SearchRequest,
)
from scripture_engine.core.logging import get_logger
from scripture_engine.services import ServiceContainer
from scripture_engine.services.scripture_service import ScriptureService
from scripture_engine.services.search_service import SearchOutcome

router = APIRouter(prefix="/api/v1", tags=["scripture"])
logger = get_logger(__name__)

Services = Annotated[ServiceContainer, Depends(get_service_container)]
Scripture = Annotated[ScriptureService, Depends(get_scripture_service)]


@router.get("/references", response_model=ResolveReferencesResponse)
async def resolve_references(
    services: Services,
    q: str = Query(..., description="Free text containing one or more references"),
) -> ResolveReferencesResponse:
    """Extract every recognisable reference from ``q``; unmatched segments are dropped."""
    return ResolveReferencesResponse(query=q, references=services.parser.parse(q))


@router.get("/books/{query}", response_model=BookResponse)
async def resolve_book(query: str, services: Services) -> BookResponse:
    """Resolve a typed book name or abbreviation to its canonical entry."""
    book = services.book_matcher.resolve(query)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": f"Unknown book {query}.",
                "suggestions": services.book_matcher.suggest(query),
            },
        )
    return BookResponse(
        name=book.name,
        chapters=book.chapters,
        chapter_verse_counts=list(book.chapter_verse_counts),
    )


@router.get("/chapters/{book}/{chapter}", response_model=ChapterResponse)
async def fetch_chapter(
    book: str, chapter: int, services: Services, scripture: Scripture
) -> ChapterResponse:
    """Return every verse of one chapter merged across translations."""
    metadata = services.book_matcher.resolve(book)
    if metadata is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown book {book}.")
    if metadata.verse_count(chapter) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid chapter for {metadata.name}.",
        )
    verses = await scripture.fetch_chapter(metadata.name, chapter)
    return ChapterResponse(book=metadata.name, chapter=chapter, verses=verses)


@router.post("/passages", response_model=PassagesResponse)
async def fetch_passages(
    payload: PassagesRequest, services: Services, scripture: Scripture
) -> PassagesResponse:
    """Fetch several references concurrently, flattened in request order."""
    problems = [
        problem
        for problem in (services.parser.validate(ref) for ref in payload.references)
        if problem
    ]
    if problems:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=problems)
    verses = await scripture.fetch_references(payload.references)
    return PassagesResponse(verses=verses)


@router.post("/search", response_model=SearchOutcome)
async def search(payload: SearchRequest, services: Services) -> SearchOutcome:
    """Interpret a search-box query as references, navigation or keywords."""
    outcome = await services.search.search(payload.query)
    logger.info("[search] %r -> %s", payload.query, outcome.kind.value)
    return outcome


__all__ = ["router"]
