"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from scripture_engine.adapters.bible_api import BibleApiAdapter
from scripture_engine.adapters.verse_corpus import JsonVerseCorpus
from scripture_engine.core.config import config
from scripture_engine.services import ServiceContainer, build_default_services


def build_default_service_container() -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    return build_default_services(
        source_port=BibleApiAdapter(),
        corpus_port=JsonVerseCorpus.from_path(config.SECONDARY_CORPUS_PATH),
    )


__all__ = ["build_default_service_container"]
