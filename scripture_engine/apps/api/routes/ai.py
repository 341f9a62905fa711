"""AI analysis, chat and keyword-search endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from scripture_engine.apps.api.dependencies import get_ai_gateway
from scripture_engine.core.api_models import (
    AnalysisRequest,
    AnalysisResponse,
    ChatRequest,
    KeywordSearchResponse,
)
from scripture_engine.core.models import ChatReply
from scripture_engine.services.ai_gateway import AIGateway

router = APIRouter(prefix="/api/v1", tags=["ai"])

Gateway = Annotated[AIGateway, Depends(get_ai_gateway)]


@router.post("/analysis", response_model=AnalysisResponse)
async def analyze_verse(payload: AnalysisRequest, gateway: Gateway) -> AnalysisResponse:
    """Return a (cached) analysis; cooldown and rate limits surface as 429."""
    text = await gateway.analyze(payload.reference, payload.kind)
    return AnalysisResponse(reference=payload.reference, kind=payload.kind, text=text)


@router.post("/chat", response_model=ChatReply)
async def chat(payload: ChatRequest, gateway: Gateway) -> ChatReply:
    """Send one chat turn. Gateway failures come back as the reply text."""
    return await gateway.chat(payload.mode, payload.message)


@router.get("/keyword-search", response_model=KeywordSearchResponse)
async def keyword_search(
    gateway: Gateway,
    term: str = Query(..., min_length=1),
) -> KeywordSearchResponse:
    return KeywordSearchResponse(term=term, references=await gateway.keyword_search(term))


__all__ = ["router"]
