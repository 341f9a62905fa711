"""Tests for the bible-api.com adapter."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from scripture_engine.adapters.bible_api import BibleApiAdapter, passage_from_payload
from scripture_engine.core.exceptions import ScriptureFetchError

# pylint: disable=missing-function-docstring

PAYLOAD = {
    "reference": "John 3:16",
    "verses": [
        {
            "book_id": "JHN",
            "book_name": "John",
            "chapter": 3,
            "verse": 16,
            "text": "For God so loved\n",
        }
    ],
    "text": "For God so loved\n",
    "translation_id": "kjv",
    "translation_name": "King James Version",
}


def _adapter(handler) -> BibleApiAdapter:  # type: ignore[no-untyped-def]
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BibleApiAdapter(base_url="https://bible.example", client=client)


def test_passage_from_payload() -> None:
    passage = passage_from_payload(PAYLOAD)
    assert passage.reference == "John 3:16"
    assert passage.translation_id == "kjv"
    assert [(v.verse, v.text) for v in passage.verses] == [(16, "For God so loved\n")]
    assert passage_from_payload({}).verses == []


def test_fetch_passage_requests_translation() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=PAYLOAD)

    passage = asyncio.run(_adapter(handler).fetch_passage("John 3:16", "kjv"))

    assert passage.verses[0].verse == 16  # noqa: PLR2004
    (request,) = seen
    assert request.url.host == "bible.example"
    assert request.url.params["translation"] == "kjv"
    assert request.url.path == "/John 3:16"


def test_http_error_status_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "not found"})

    with pytest.raises(ScriptureFetchError) as excinfo:
        asyncio.run(_adapter(handler).fetch_passage("Jude 2", "web"))
    assert excinfo.value.status_code == 404  # noqa: PLR2004
    assert str(excinfo.value) == "HTTP error! status: 404 for web at Jude 2"


def test_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ScriptureFetchError) as excinfo:
        asyncio.run(_adapter(handler).fetch_passage("John 3", "kjv"))
    assert excinfo.value.status_code is None


def test_malformed_body_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(ScriptureFetchError, match="Malformed response"):
        asyncio.run(_adapter(handler).fetch_passage("John 3", "kjv"))


@pytest.mark.parametrize(
    "body",
    [
        {"verses": [{"text": "no number"}]},
        {"verses": [{"verse": "sixteen", "text": "x"}]},
        ["not", "an", "object"],
        {"verses": 7},
    ],
)
def test_unexpected_json_shape_raises(body) -> None:  # type: ignore[no-untyped-def]
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(ScriptureFetchError, match="Malformed response"):
        asyncio.run(_adapter(handler).fetch_passage("John 3", "web"))
