"""Tests for the logging helpers with correlation ids."""

import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any, cast

from pythonjsonlogger import jsonlogger

from scripture_engine.core.logging import (
    LOG_SCHEMA_VERSION,
    CorrelationIdFilter,
    bind_correlation_id,
    correlation_id_context,
    get_correlation_id,
    get_logger,
    reset_correlation_id,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello",
        args=None,
        exc_info=None,
    )


def test_correlation_filter_attaches_context():
    """Filter should attach the current correlation id onto log records."""
    token = bind_correlation_id("abc123")
    try:
        record = _record()
        assert CorrelationIdFilter().filter(record) is True
        assert cast(Any, record).__dict__["correlation_id"] == "abc123"
    finally:
        reset_correlation_id(token)

    record = _record()
    CorrelationIdFilter().filter(record)
    assert cast(Any, record).__dict__["correlation_id"] == "-"


def test_correlation_context_manager_restores_state():
    """Nested contexts restore the original correlation id."""
    with correlation_id_context("ctx"):
        with correlation_id_context("nested"):
            assert get_correlation_id() == "nested"
        assert get_correlation_id() == "ctx"
    assert get_correlation_id() is None


def test_get_logger_installs_json_handlers_once():
    """Repeated get_logger calls reuse the stream and rotating file handlers."""
    first = get_logger("scripture_engine.tests.logging")
    second = get_logger("scripture_engine.tests.logging")

    assert first is second
    assert len(first.handlers) == 2  # noqa: PLR2004
    assert any(isinstance(handler, RotatingFileHandler) for handler in first.handlers)
    for handler in first.handlers:
        assert any(isinstance(flt, CorrelationIdFilter) for flt in handler.filters)
        assert isinstance(handler.formatter, jsonlogger.JsonFormatter)


def test_formatter_emits_schema_version_and_cid():
    """Structured output carries the renamed fields and schema version."""
    handler = get_logger("scripture_engine.tests.logging.format").handlers[0]
    record = _record()
    with correlation_id_context("req-1"):
        handler.filters[0].filter(record)
    assert handler.formatter is not None
    payload = json.loads(handler.formatter.format(record))
    assert payload["cid"] == "req-1"
    assert payload["level"] == "INFO"
    assert payload["message"] == "hello"
    assert payload["schema_version"] == LOG_SCHEMA_VERSION
