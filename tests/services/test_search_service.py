"""Tests for search-box orchestration."""

from __future__ import annotations

import asyncio

from engine_fakes import FakeClock, FakeOpenAIClient, FakeScriptureSource, passage
from scripture_engine.core.exceptions import ScriptureFetchError
from scripture_engine.services import build_default_services
from scripture_engine.services.ai_gateway import AIGateway, CooldownGate
from scripture_engine.services.search_service import SearchOutcomeKind, SearchService

# pylint: disable=missing-function-docstring


def _search(
    source: FakeScriptureSource | None = None, replies: list | None = None
) -> tuple[SearchService, FakeOpenAIClient]:
    client = FakeOpenAIClient(replies or [])
    gateway = AIGateway(
        api_key="sk-test",
        client_factory=lambda _key: client,
        cooldown=CooldownGate(60, clock=FakeClock()),
    )
    services = build_default_services(
        source_port=source or FakeScriptureSource(), gateway=gateway
    )
    return services.search, client


def _john_and_romans() -> FakeScriptureSource:
    return FakeScriptureSource(
        {
            ("John 3:16", "kjv"): passage("John 3:16", (16, "For God so loved")),
            ("Romans 8:28", "kjv"): passage("Romans 8:28", (28, "And we know")),
        }
    )


def test_empty_query_is_an_error() -> None:
    search, client = _search()
    outcome = asyncio.run(search.search("   "))
    assert outcome.kind is SearchOutcomeKind.ERROR
    assert outcome.error == "Enter a reference or keyword to search."
    assert not client.responses.calls


def test_several_references_are_fetched_together() -> None:
    search, client = _search(_john_and_romans())
    outcome = asyncio.run(search.search("John 3:16; Rom 8:28"))

    assert outcome.kind is SearchOutcomeKind.REFERENCES
    assert [ref.label for ref in outcome.references] == ["John 3:16", "Romans 8:28"]
    assert [(v.book, v.verse) for v in outcome.verses] == [("John", 16), ("Romans", 28)]
    assert not client.responses.calls


def test_reference_fetch_failure_is_reported() -> None:
    source = FakeScriptureSource({("John 3:16", "kjv"): ScriptureFetchError("down")})
    search, _ = _search(source)
    outcome = asyncio.run(search.search("John 3:16, Rom 8:28"))
    assert outcome.kind is SearchOutcomeKind.ERROR
    assert outcome.error == "Failed to fetch results."


def test_single_reference_navigates() -> None:
    search, _ = _search()
    outcome = asyncio.run(search.search("Rev 22:21"))
    assert outcome.kind is SearchOutcomeKind.NAVIGATE
    assert outcome.navigate_to is not None
    assert outcome.navigate_to.label == "Revelation 22:21"


def test_single_reference_with_bad_chapter() -> None:
    search, _ = _search()
    outcome = asyncio.run(search.search("John 30:1"))
    assert outcome.kind is SearchOutcomeKind.ERROR
    assert outcome.error == "Invalid chapter for John."
    assert outcome.navigate_to is None


def test_keyword_search_fetches_suggested_references() -> None:
    search, client = _search(_john_and_romans(), ["John 3:16, Romans 8:28"])
    outcome = asyncio.run(search.search("love"))

    assert outcome.kind is SearchOutcomeKind.KEYWORD
    assert [ref.label for ref in outcome.references] == ["John 3:16", "Romans 8:28"]
    assert len(outcome.verses) == 2  # noqa: PLR2004
    assert len(client.responses.calls) == 1


def test_keyword_search_with_no_results() -> None:
    search, _ = _search(replies=["  "])
    outcome = asyncio.run(search.search("love"))
    assert outcome.kind is SearchOutcomeKind.ERROR
    assert outcome.error == 'No verses found for "love".'


def test_keyword_search_with_unparsable_results() -> None:
    search, _ = _search(replies=["I could not find anything."])
    outcome = asyncio.run(search.search("love"))
    assert outcome.error == 'Could not parse results for "love".'


def test_keyword_search_fetch_failure() -> None:
    source = FakeScriptureSource({("John 3:16", "kjv"): ScriptureFetchError("down")})
    search, _ = _search(source, ["John 3:16"])
    outcome = asyncio.run(search.search("love"))
    assert outcome.error == "An error occurred during keyword search."


def test_unknown_book_offers_suggestions() -> None:
    search, _ = _search(replies=[""])
    outcome = asyncio.run(search.search("Jhn 3:16"))
    assert outcome.kind is SearchOutcomeKind.ERROR
    assert outcome.error == 'No verses found for "Jhn 3:16".'
    assert "John" in outcome.suggestions
