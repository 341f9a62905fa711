"""JSON logging for the engine, stamped with the active request's correlation id.

Every logger returned by :func:`get_logger` writes one JSON object per record
to stdout and to a size-rotated file under :data:`LOGS_DIR`. The two handlers
are built once and shared by all engine loggers.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from pythonjsonlogger import jsonlogger

from scripture_engine.core.config import settings

BASE_DIR = Path(__file__).resolve().parent.parent
ROOT_DIR = BASE_DIR.parent

LOG_SCHEMA_VERSION = "1.0.0"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_current_cid: ContextVar[Optional[str]] = ContextVar("scripture_cid", default=None)


def _log_level() -> int:
    name = str(getattr(settings, "SCRIPTURE_LOG_LEVEL", "info")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _candidate_log_dirs() -> list[Path]:
    """Log directory candidates, most preferred first."""
    override = getattr(settings, "SCRIPTURE_LOG_DIR", None)
    data_dir = Path(getattr(settings, "DATA_DIR", Path("/data")))
    candidates = [Path(override)] if override else []
    return candidates + [ROOT_DIR / "logs", data_dir / "logs", BASE_DIR / "logs"]


def _resolve_logs_dir() -> Path:
    """Return the first candidate directory that can be created."""
    for directory in _candidate_log_dirs():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return directory
    raise PermissionError("Unable to create a writable logs directory")


LOG_LEVEL = _log_level()
LOGS_DIR = _resolve_logs_dir()
LOG_FILE_PATH = LOGS_DIR / "scripture_engine.log"


def bind_correlation_id(value: Optional[str]) -> Token[Optional[str]]:
    return _current_cid.set(value)


def reset_correlation_id(token: Token[Optional[str]]) -> None:
    _current_cid.reset(token)


def get_correlation_id() -> Optional[str]:
    return _current_cid.get()


@contextmanager
def correlation_id_context(value: Optional[str]) -> Iterator[None]:
    """Bind ``value`` for the duration of the block."""
    token = bind_correlation_id(value)
    try:
        yield
    finally:
        reset_correlation_id(token)


class CorrelationIdFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Copy the bound correlation id (or ``-``) onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class VersionedJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds ``schema_version`` to every entry."""

    def __init__(self, *args, schema_version: str = LOG_SCHEMA_VERSION, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._schema_version = schema_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("schema_version", self._schema_version)


def _build_handlers() -> tuple[logging.Handler, ...]:
    formatter = VersionedJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
            "correlation_id": "cid",
        },
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
    )
    cid_filter = CorrelationIdFilter()
    handlers: tuple[logging.Handler, ...] = (
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(
            LOG_FILE_PATH,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        ),
    )
    for handler in handlers:
        handler.addFilter(cid_filter)
        handler.setFormatter(formatter)
    return handlers


_shared_handlers: tuple[logging.Handler, ...] = ()


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)`` wired to the shared JSON handlers."""
    global _shared_handlers  # pylint: disable=global-statement
    if not _shared_handlers:
        _shared_handlers = _build_handlers()

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    for handler in _shared_handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger


__all__ = [
    "CorrelationIdFilter",
    "LOG_FILE_PATH",
    "LOG_SCHEMA_VERSION",
    "bind_correlation_id",
    "correlation_id_context",
    "get_correlation_id",
    "get_logger",
    "reset_correlation_id",
]
