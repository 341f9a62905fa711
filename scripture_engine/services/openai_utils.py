"""Utilities for working with OpenAI SDK objects."""

from typing import Any

from openai import APIStatusError, OpenAIError, RateLimitError

from scripture_engine.core.logging import get_logger

logger = get_logger(__name__)

RATE_LIMIT_STATUS = 429
RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")


def is_rate_limit_error(exc: BaseException) -> bool:
    """Return True when ``exc`` carries a rate-limit signal.

    Matches the SDK's RateLimitError, any status error with HTTP 429, and
    messages mentioning ``429`` or ``RESOURCE_EXHAUSTED``.
    """
    if isinstance(exc, RateLimitError):
        return True
    if isinstance(exc, APIStatusError) and exc.status_code == RATE_LIMIT_STATUS:
        return True
    if isinstance(exc, OpenAIError):
        message = str(exc)
        return any(marker in message for marker in RATE_LIMIT_MARKERS)
    return False


def extract_cached_input_tokens(usage: Any) -> int | None:
    """Best-effort extraction of cached input token counts from SDK usage objects.

    Supports:
    - Responses API: usage.input_tokens_details.cached_tokens
    - Chat Completions: usage.prompt_tokens_details.cached_tokens
    """
    for attr in ("input_tokens_details", "prompt_tokens_details"):
        details = getattr(usage, attr, None)
        if details is None:
            continue
        val = getattr(details, "cached_tokens", None)
        if val is None and isinstance(details, dict):
            val = details.get("cached_tokens")
        if isinstance(val, int) and val > 0:
            return val
    return None


def log_openai_usage(usage: Any, model: str) -> None:
    """Log token usage reported on a response, if any."""
    if usage is None:
        return

    it = getattr(usage, "input_tokens", None) or getattr(usage, "prompt_tokens", None)
    ot = getattr(usage, "output_tokens", None) or getattr(usage, "completion_tokens", None)
    tt = getattr(usage, "total_tokens", None)
    if tt is None and (it is not None or ot is not None):
        tt = (it or 0) + (ot or 0)

    logger.info(
        "[ai-gateway] usage model=%s input=%s output=%s total=%s cached=%s",
        model,
        it,
        ot,
        tt,
        extract_cached_input_tokens(usage),
    )


__all__ = [
    "RATE_LIMIT_MARKERS",
    "extract_cached_input_tokens",
    "is_rate_limit_error",
    "log_openai_usage",
]
