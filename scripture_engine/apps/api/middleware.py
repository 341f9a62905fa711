"""ASGI middleware that gives every HTTP request a correlation id."""

from __future__ import annotations

import time
import uuid
from typing import Any, Iterable, MutableMapping

from scripture_engine.core.logging import correlation_id_context, get_logger

logger = get_logger(__name__)

CORRELATION_HEADERS = (b"x-request-id", b"x-correlation-id")

Message = MutableMapping[str, Any]


def _incoming_correlation_id(raw_headers: Iterable[tuple[bytes, bytes]]) -> str:
    """Use the caller's request/correlation id when present, else mint one."""
    supplied = {name.lower(): value for name, value in raw_headers}
    for header in CORRELATION_HEADERS:
        if supplied.get(header):
            return supplied[header].decode("latin-1")
    return uuid.uuid4().hex


def _stamp_headers(message: Message, correlation_id: str) -> None:
    headers = list(message.get("headers", []))
    present = {name.lower() for name, _ in headers}
    value = correlation_id.encode("latin-1")
    headers.extend((header, value) for header in CORRELATION_HEADERS if header not in present)
    message["headers"] = headers


class CorrelationIdMiddleware:  # pylint: disable=too-few-public-methods
    """Bind a correlation id per request, echo it back and log the outcome."""

    def __init__(self, app) -> None:  # type: ignore[no-untyped-def]
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = _incoming_correlation_id(scope.get("headers", []))
        outcome = {"status": 500}
        started = time.perf_counter()

        async def send_with_id(message: Message) -> None:
            if message.get("type") == "http.response.start":
                outcome["status"] = int(message.get("status") or 500)
                _stamp_headers(message, correlation_id)
            await send(message)

        with correlation_id_context(correlation_id):
            try:
                await self.app(scope, receive, send_with_id)
            finally:
                logger.info(
                    "[http] %s %s -> %d",
                    scope.get("method", ""),
                    scope.get("path", ""),
                    outcome["status"],
                    extra={"duration_ms": round((time.perf_counter() - started) * 1000.0, 2)},
                )


__all__ = ["CorrelationIdMiddleware"]
