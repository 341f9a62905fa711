"""Gateway to the external AI text-generation service.

All state lives on the gateway instance and is created on first use:

- a lazily constructed ``AsyncOpenAI`` client,
- a cooldown gate that refuses requests for a while after a rate-limit signal,
- an unbounded analysis cache keyed by ``(book, chapter, verse, kind)``,
- one persistent chat session per tier.

Calls are never retried; the cooldown expiring is the only implicit retry.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from scripture_engine.core.config import config
from scripture_engine.core.exceptions import (
    AICooldownError,
    AIGatewayError,
    AIRateLimitedError,
    ApiKeyError,
    UpstreamError,
)
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import AnalysisKind, ChatMode, ChatReply, VerseRef
from scripture_engine.services.openai_utils import is_rate_limit_error, log_openai_usage

logger = get_logger(__name__)

GENERATE_SYSTEM_INSTRUCTION = (
    "You are a concise biblical expert. Provide direct answers without filler."
)

CHAT_SYSTEM_INSTRUCTIONS: Dict[ChatMode, str] = {
    ChatMode.FAST: GENERATE_SYSTEM_INSTRUCTION,
    ChatMode.STANDARD: "You are an expert Bible scholar. Be precise, deep, and context-rich.",
    ChatMode.DEEP_THOUGHT: (
        "You are an expert Bible scholar. Be precise, deep, and context-rich. "
        "Reason carefully through the original languages, historical setting and "
        "the wider canon before answering."
    ),
}

ANALYSIS_PROMPTS: Dict[AnalysisKind, str] = {
    AnalysisKind.CROSS_REFERENCES: (
        "Provide key cross-references for {label}. Group by theme."
    ),
    AnalysisKind.HISTORICAL_CONTEXT: (
        "Explain the historical and cultural context of {label}."
    ),
    AnalysisKind.INTERLINEAR: """Provide a detailed interlinear breakdown for {label}.

Original Text (Greek/Hebrew):
Include full verse text in original language.

English Transliteration:
Clear transliteration.

Word-by-Word Analysis:
List each key word with transliteration and a simple definition.""",
}

KEYWORD_SEARCH_PROMPT = """Search the Bible for verses related to "{term}".
Return ONLY a list like: John 3:16, Romans 8:28."""

AnalysisKey = tuple[str, int, int, AnalysisKind]
ClientFactory = Callable[[str], Any]


def default_chat_models() -> Dict[ChatMode, str]:
    """Map chat tiers to the configured model identifiers."""
    return {
        ChatMode.FAST: config.AI_FAST_MODEL,
        ChatMode.STANDARD: config.AI_STANDARD_MODEL,
        ChatMode.DEEP_THOUGHT: config.AI_DEEP_MODEL,
    }


class CooldownGate:
    """Process-lifetime cooldown: OPEN while ``now >= cooldown_until``."""

    def __init__(
        self,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cooldown_seconds = cooldown_seconds
        self.cooldown_until = 0.0
        self._clock = clock

    def remaining(self) -> float:
        return max(0.0, self.cooldown_until - self._clock())

    @property
    def is_cooling(self) -> bool:
        return self._clock() < self.cooldown_until

    def check(self) -> None:
        """Raise AICooldownError while cooling; no-op when open."""
        if self.is_cooling:
            raise AICooldownError(self.remaining())

    def trip(self) -> None:
        self.cooldown_until = self._clock() + self.cooldown_seconds
        logger.warning(
            "[ai-gateway] rate limited; cooling down for %.0fs", self.cooldown_seconds
        )


@dataclass(slots=True)
class AnalysisCache:
    """Unbounded analysis results for the lifetime of the gateway."""

    entries: Dict[AnalysisKey, str] = field(default_factory=dict)

    @staticmethod
    def key(ref: VerseRef, kind: AnalysisKind) -> AnalysisKey:
        return (ref.book, ref.chapter, ref.verse, kind)

    def get(self, ref: VerseRef, kind: AnalysisKind) -> str | None:
        return self.entries.get(self.key(ref, kind))

    def put(self, ref: VerseRef, kind: AnalysisKind, text: str) -> None:
        self.entries[self.key(ref, kind)] = text

    def __len__(self) -> int:
        return len(self.entries)


class ChatSession:
    """Conversation handle for one tier, threaded through ``previous_response_id``."""

    def __init__(self, client: Any, model: str, instructions: str) -> None:
        self._client = client
        self.model = model
        self.instructions = instructions
        self.previous_response_id: str | None = None
        self.turns = 0
        self._turn_lock = asyncio.Lock()

    async def send(self, message: str) -> str:
        """Send one turn; overlapping turns are queued in arrival order."""
        async with self._turn_lock:
            kwargs: dict[str, Any] = {
                "model": self.model,
                "input": message,
                "instructions": self.instructions,
            }
            if self.previous_response_id:
                kwargs["previous_response_id"] = self.previous_response_id
            response = await self._client.responses.create(**kwargs)
            self.previous_response_id = (
                getattr(response, "id", None) or self.previous_response_id
            )
            self.turns += 1
        log_openai_usage(getattr(response, "usage", None), self.model)
        return response.output_text or ""


class AIGateway:
    """Resilient client for the AI text-generation service."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_factory: Optional[ClientFactory] = None,
        cooldown: Optional[CooldownGate] = None,
        cache: Optional[AnalysisCache] = None,
        chat_models: Optional[Dict[ChatMode, str]] = None,
        analysis_model: Optional[str] = None,
    ) -> None:
        self._api_key = api_key or config.OPENAI_API_KEY
        self._client_factory: ClientFactory = client_factory or (
            lambda key: AsyncOpenAI(api_key=key)
        )
        self._client: Any = None
        self.cooldown = (
            cooldown if cooldown is not None else CooldownGate(config.AI_COOLDOWN_SECONDS)
        )
        self.cache = cache if cache is not None else AnalysisCache()
        self.sessions: Dict[ChatMode, ChatSession] = {}
        self._chat_models = chat_models or default_chat_models()
        self._analysis_model = analysis_model or config.AI_ANALYSIS_MODEL

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ApiKeyError("API key missing.")
            self._client = self._client_factory(self._api_key)
        return self._client

    def _translate_error(self, exc: OpenAIError) -> AIGatewayError:
        if is_rate_limit_error(exc):
            self.cooldown.trip()
            return AIRateLimitedError(self.cooldown.cooldown_seconds)
        logger.error("[ai-gateway] upstream error: %s", exc)
        return UpstreamError(str(exc) or exc.__class__.__name__)

    async def generate(self, model: str, prompt: str) -> str:
        """One-shot completion with the fixed expert instruction."""
        self.cooldown.check()
        client = self._get_client()
        try:
            response = await client.responses.create(
                model=model,
                input=prompt,
                instructions=GENERATE_SYSTEM_INSTRUCTION,
            )
        except OpenAIError as exc:
            raise self._translate_error(exc) from exc
        log_openai_usage(getattr(response, "usage", None), model)
        return response.output_text or ""

    def _get_session(self, mode: ChatMode) -> ChatSession:
        session = self.sessions.get(mode)
        if session is None:
            session = ChatSession(
                self._get_client(),
                model=self._chat_models[mode],
                instructions=CHAT_SYSTEM_INSTRUCTIONS[mode],
            )
            self.sessions[mode] = session
            logger.info("[ai-gateway] opened %s chat session (%s)", mode.value, session.model)
        return session

    async def converse(self, mode: ChatMode, message: str) -> str:
        """Send one turn on the persistent session for ``mode``."""
        self.cooldown.check()
        session = self._get_session(mode)
        try:
            return await session.send(message)
        except OpenAIError as exc:
            raise self._translate_error(exc) from exc

    async def analyze(self, ref: VerseRef, kind: AnalysisKind) -> str:
        """Cached analysis of one verse.

        The cache is consulted before the cooldown, so hits are served even
        while cooling. Failures are never cached.
        """
        cached = self.cache.get(ref, kind)
        if cached is not None:
            logger.info("[ai-gateway] cache hit for %s (%s)", ref.label, kind.value)
            return cached

        prompt = ANALYSIS_PROMPTS[kind].format(label=ref.label)
        text = await self.generate(self._analysis_model, prompt)
        self.cache.put(ref, kind, text)
        return text

    async def keyword_search(self, term: str) -> str:
        """Ask for a bare comma-separated reference list; ``""`` on any failure."""
        prompt = KEYWORD_SEARCH_PROMPT.format(term=term)
        try:
            return await self.generate(self._analysis_model, prompt)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("[ai-gateway] keyword search error: %s", exc, exc_info=True)
            return ""

    async def chat(self, mode: ChatMode, message: str) -> ChatReply:
        """Answer a chat message; gateway failures become the reply text.

        The fast tier answers one-shot; other tiers use their persistent
        session. A missing credential still raises ApiKeyError.
        """
        try:
            if mode is ChatMode.FAST:
                text = await self.generate(self._chat_models[ChatMode.FAST], message)
            else:
                text = await self.converse(mode, message)
        except AIGatewayError as exc:
            return ChatReply(text=str(exc) or "AI error", sources=[])
        return ChatReply(text=text, sources=[])


__all__ = [
    "AIGateway",
    "AnalysisCache",
    "ChatSession",
    "CooldownGate",
    "ANALYSIS_PROMPTS",
    "CHAT_SYSTEM_INSTRUCTIONS",
    "GENERATE_SYSTEM_INSTRUCTION",
    "KEYWORD_SEARCH_PROMPT",
]
