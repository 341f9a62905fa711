"""Core exception types shared across layers."""

from __future__ import annotations

import math


class ScriptureEngineError(Exception):
    """Base class for errors surfaced by the engine."""


class ApiKeyError(ScriptureEngineError):
    """Raised when the AI credential is missing. Fatal; never retried."""


class AIGatewayError(ScriptureEngineError):
    """Base class for failures talking to the AI text-generation service."""


class AICooldownError(AIGatewayError):
    """Raised without contacting the AI service while the cooldown is active."""

    def __init__(self, remaining_seconds: float) -> None:
        self.remaining_seconds = max(0, math.ceil(remaining_seconds))
        super().__init__(f"AI cooling down. Try again in {self.remaining_seconds}s.")


class AIRateLimitedError(AIGatewayError):
    """Raised when the AI service answers with a rate-limit signal."""

    def __init__(self, cooldown_seconds: float) -> None:
        self.cooldown_seconds = math.ceil(cooldown_seconds)
        super().__init__(
            f"AI is busy. Please wait {self.cooldown_seconds} seconds and try again."
        )


class UpstreamError(AIGatewayError):
    """Remote AI failure passed through with the upstream message."""


class ScriptureFetchError(ScriptureEngineError):
    """Raised when the scripture-text source answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NoVersesFoundError(ScriptureEngineError):
    """Raised when the authoritative translation returns no verses for a chapter."""


__all__ = [
    "ScriptureEngineError",
    "ApiKeyError",
    "AIGatewayError",
    "AICooldownError",
    "AIRateLimitedError",
    "UpstreamError",
    "ScriptureFetchError",
    "NoVersesFoundError",
]
