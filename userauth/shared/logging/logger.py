"""Loguru setup shared by the API and its stdlib-logging dependencies.

Every record carries ``extra["correlation_id"]``: the request id while a
request is being served, ``-`` otherwise. Messages pass through
:func:`sanitize_record` before any sink writes them.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "app.log"
_LOG_ROTATION = "10 MB"
_LOG_RETENTION = 5

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")

# Records logged before setup_logging() still need the key for _FMT.
_logger.configure(extra={"correlation_id": "-"})


def _resolve_level(level: str | None, debug_mode: bool) -> str:
    if debug_mode:
        return "DEBUG"
    return (level or os.getenv("LOG_LEVEL") or "INFO").upper()


def _resolve_log_file(log_file: str | os.PathLike[str] | None) -> Path:
    configured = log_file or os.getenv("LOG_FILE")
    return Path(configured) if configured else _DEFAULT_LOG_FILE


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that binds the current correlation id on every call."""

    def __getattr__(self, name: str) -> Any:  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(
    level: str | None = None,
    *,
    log_file: str | os.PathLike[str] | None = None,
    debug_mode: bool = False,
) -> None:
    """(Re)build the loguru sinks and route stdlib logging through them.

    Safe to call more than once; each call replaces the previous sinks.
    """
    resolved_level = _resolve_level(level, debug_mode)
    path = _resolve_log_file(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    common: dict[str, Any] = {
        "level": resolved_level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)
    _logger.add(
        str(path),
        colorize=False,
        enqueue=True,
        encoding="utf-8",
        rotation=_LOG_ROTATION,
        retention=_LOG_RETENTION,
        **common,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
