"""Map engine exceptions onto HTTP responses."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from scripture_engine.core.exceptions import (
    AICooldownError,
    AIRateLimitedError,
    ApiKeyError,
    NoVersesFoundError,
    ScriptureEngineError,
    ScriptureFetchError,
    UpstreamError,
)
from scripture_engine.core.logging import get_logger

logger = get_logger(__name__)


def _error_response(
    status: HTTPStatus, exc: Exception, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "error": exc.__class__.__name__},
        headers=headers,
    )


async def handle_api_key_error(_: Request, exc: Exception) -> JSONResponse:
    logger.error("[api] AI credential missing: %s", exc)
    return _error_response(HTTPStatus.SERVICE_UNAVAILABLE, exc)


async def handle_cooldown(_: Request, exc: Exception) -> JSONResponse:
    retry_after = exc.remaining_seconds if isinstance(exc, AICooldownError) else 0
    return _error_response(
        HTTPStatus.TOO_MANY_REQUESTS, exc, headers={"Retry-After": str(retry_after)}
    )


async def handle_rate_limited(_: Request, exc: Exception) -> JSONResponse:
    retry_after = exc.cooldown_seconds if isinstance(exc, AIRateLimitedError) else 0
    return _error_response(
        HTTPStatus.TOO_MANY_REQUESTS, exc, headers={"Retry-After": str(retry_after)}
    )


async def handle_upstream(_: Request, exc: Exception) -> JSONResponse:
    return _error_response(HTTPStatus.BAD_GATEWAY, exc)


async def handle_no_verses(_: Request, exc: Exception) -> JSONResponse:
    return _error_response(HTTPStatus.NOT_FOUND, exc)


async def handle_engine_error(_: Request, exc: Exception) -> JSONResponse:
    logger.error("[api] unhandled engine error: %s", exc)
    return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers from the most specific exception to the base class."""
    app.add_exception_handler(ApiKeyError, handle_api_key_error)
    app.add_exception_handler(AICooldownError, handle_cooldown)
    app.add_exception_handler(AIRateLimitedError, handle_rate_limited)
    app.add_exception_handler(UpstreamError, handle_upstream)
    app.add_exception_handler(ScriptureFetchError, handle_upstream)
    app.add_exception_handler(NoVersesFoundError, handle_no_verses)
    app.add_exception_handler(ScriptureEngineError, handle_engine_error)


__all__ = ["register_exception_handlers"]
