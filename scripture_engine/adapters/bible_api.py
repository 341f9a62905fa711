"""Scripture-text adapter backed by the public bible-api.com JSON endpoint."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping, Optional

import httpx

from scripture_engine.core.config import config
from scripture_engine.core.exceptions import ScriptureFetchError
from scripture_engine.core.logging import get_logger
from scripture_engine.core.models import SourcePassage, SourceVerse

logger = get_logger(__name__)

_HTTP_ERROR_THRESHOLD = HTTPStatus.BAD_REQUEST


def passage_from_payload(data: Mapping[str, Any]) -> SourcePassage:
    """Build a :class:`SourcePassage` from a bible-api.com response body."""
    verses = [
        SourceVerse(verse=int(item["verse"]), text=str(item.get("text", "")))
        for item in data.get("verses") or []
    ]
    return SourcePassage(
        reference=str(data.get("reference", "")),
        verses=verses,
        translation_id=str(data.get("translation_id", "")),
        translation_name=str(data.get("translation_name", "")),
    )


class BibleApiAdapter:
    """Fetch passages one translation at a time.

    ``client`` may be supplied to share a connection pool (or a mock transport
    in tests); otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        base = base_url or config.SCRIPTURE_API_BASE_URL
        self._base_url = base if base.endswith("/") else f"{base}/"
        self._timeout = timeout if timeout is not None else config.SCRIPTURE_API_TIMEOUT_SECONDS
        self._client = client

    async def _get(self, url: str, params: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, params=params)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url, params=params)

    async def fetch_passage(self, reference: str, translation: str) -> SourcePassage:
        url = f"{self._base_url}{reference}"
        try:
            response = await self._get(url, {"translation": translation})
        except httpx.RequestError as exc:
            logger.error("[scripture] request failed for %s (%s): %s", reference, translation, exc)
            raise ScriptureFetchError(
                f"Request failed for {translation} at {reference}: {exc}"
            ) from exc

        if response.status_code >= _HTTP_ERROR_THRESHOLD:
            logger.error(
                "[scripture] HTTP %s for %s (%s)", response.status_code, reference, translation
            )
            raise ScriptureFetchError(
                f"HTTP error! status: {response.status_code} for {translation} at {reference}",
                status_code=response.status_code,
            )

        try:
            passage = passage_from_payload(response.json())
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("[scripture] malformed body for %s (%s): %r", reference, translation, exc)
            raise ScriptureFetchError(
                f"Malformed response for {translation} at {reference}"
            ) from exc
        logger.info(
            "[scripture] fetched %s (%s): %d verse(s)", reference, translation, len(passage.verses)
        )
        return passage


__all__ = ["BibleApiAdapter", "passage_from_payload"]
