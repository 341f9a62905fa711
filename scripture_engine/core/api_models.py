"""API request/response models for the REST API."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from scripture_engine.core.models import (
    AnalysisKind,
    ChatMode,
    MergedVerse,
    ParsedReference,
    ReferenceVerse,
    VerseRef,
)


class ResolveReferencesResponse(BaseModel):
    """Response model for GET /api/v1/references."""

    query: str
    references: List[ParsedReference]


class BookResponse(BaseModel):
    """Response model for GET /api/v1/books/{query}."""

    name: str
    chapters: int
    chapter_verse_counts: List[int]


class ChapterResponse(BaseModel):
    """Response model for GET /api/v1/chapters/{book}/{chapter}."""

    book: str
    chapter: int
    verses: List[MergedVerse]


class PassagesRequest(BaseModel):
    """Request model for POST /api/v1/passages."""

    references: List[ParsedReference] = Field(..., min_length=1)


class PassagesResponse(BaseModel):
    """Response model for POST /api/v1/passages."""

    verses: List[ReferenceVerse]


class SearchRequest(BaseModel):
    """Request model for POST /api/v1/search."""

    query: str = Field(..., description="Reference(s) or keyword typed by the reader")


class AnalysisRequest(BaseModel):
    """Request model for POST /api/v1/analysis."""

    reference: VerseRef
    kind: AnalysisKind


class AnalysisResponse(BaseModel):
    """Response model for POST /api/v1/analysis."""

    reference: VerseRef
    kind: AnalysisKind
    text: str


class ChatRequest(BaseModel):
    """Request model for POST /api/v1/chat."""

    message: str = Field(default="", description="User message for the assistant")
    mode: ChatMode = Field(default=ChatMode.STANDARD, description="Quality/cost tier")


class KeywordSearchResponse(BaseModel):
    """Response model for GET /api/v1/keyword-search."""

    term: str
    references: str = Field(..., description="Comma-separated references; empty if none")


__all__ = [
    "ResolveReferencesResponse",
    "BookResponse",
    "ChapterResponse",
    "PassagesRequest",
    "PassagesResponse",
    "SearchRequest",
    "AnalysisRequest",
    "AnalysisResponse",
    "ChatRequest",
    "KeywordSearchResponse",
]
