"""Application service layer wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from scripture_engine.core.ports import ScriptureSourcePort, VerseCorpusPort

from .ai_gateway import AIGateway
from .book_matcher import BookMatcher
from .reference_parser import ReferenceParser
from .scripture_service import ScriptureService
from .search_service import SearchService
from .verse_merger import VerseMerger


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    book_matcher: BookMatcher
    parser: ReferenceParser
    scripture: ScriptureService
    gateway: AIGateway
    search: SearchService


def build_default_services(
    *,
    source_port: ScriptureSourcePort,
    corpus_port: Optional[VerseCorpusPort] = None,
    gateway: Optional[AIGateway] = None,
) -> ServiceContainer:
    """Return a service container sharing one book table and one AI gateway."""

    book_matcher = BookMatcher()
    parser = ReferenceParser(book_matcher)
    merger = VerseMerger(corpus_port, book_matcher)
    scripture = ScriptureService(source_port, merger)
    ai_gateway = gateway or AIGateway()
    return ServiceContainer(
        book_matcher=book_matcher,
        parser=parser,
        scripture=scripture,
        gateway=ai_gateway,
        search=SearchService(parser, scripture, ai_gateway),
    )


__all__ = ["ServiceContainer", "build_default_services"]
