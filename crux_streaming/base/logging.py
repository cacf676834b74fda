"""Base structured logging utilities for the streaming adapters.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters.
- Dependency-free: stdlib ``logging`` plus the local JSON formatter.

All adapter loggers are children of the shared ``providers`` logger. Events are
emitted through :func:`log_event` as one JSON object per line, keyed by an
``event`` name such as ``createCompletion.request``. A ``TRACE`` level below
``DEBUG`` is registered for per-stream-event logging.
"""
from __future__ import annotations

import logging
import json
import sys
import os
import contextlib
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext


TRACE = 5
logging.addLevelName(TRACE, "TRACE")

BASE_LOGGER_NAME = "providers"
_BASE_LOGGER_ATTR = "_providers_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_providers_console_handler"
_FILE_HANDLER_ATTR = "_providers_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    case-insensitively. Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "TRACE": TRACE,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``providers`` logger.

    The first call installs a single stderr handler; later calls only refresh
    the level (``PROVIDERS_LOG_LEVEL`` wins over ``level``) and replace the
    console handler if its stream was closed (pytest capture swaps streams).
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv("PROVIDERS_LOG_LEVEL"), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # setStream() would flush the closed stream first; swap the handler.
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                replacement = logging.StreamHandler(sys.stderr)
                replacement.setLevel(desired_level)
                replacement.setFormatter(existing.formatter or _make_formatter(json_mode))
                setattr(replacement, _CONSOLE_HANDLER_ATTR, True)
                logger.addHandler(replacement)
                continue
            existing.setLevel(desired_level)
            if stream_obj is not sys.stderr:
                with contextlib.suppress(Exception):
                    existing.setStream(sys.stderr)  # type: ignore[attr-defined]
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger wired to the shared ``providers`` handler.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so each record is emitted exactly once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            logger.removeHandler(handler)
            with contextlib.suppress(Exception):
                handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``providers`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "TRACE").
        When ``None``, the current level is preserved.
    file_path: Optional[str]
        When provided, a rotating file handler (10MB x 5) writing to
        ``file_path`` is attached, replacing any previously managed file
        handler. When ``None``, managed file handlers are removed.
    json_mode: bool
        Formatter choice for the file handler.

    Returns
    -------
    logging.Logger
        The configured base logger.

    Notes
    -----
    Handlers not created by this module are left untouched.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_make_formatter(json_mode))
            h.setLevel(logger.level)
            return logger
        logger.removeHandler(h)
        with contextlib.suppress(Exception):  # pragma: no cover - defensive
            h.close()
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (should be obtained through ``get_logger``).
    event: str
        Event name (e.g. ``createChatCompletion.event``).
    ctx: LogContext | None
        Provider/model/operation context; merged shallowly.
    level: int
        Logging level for the record; ``TRACE`` for per-event noise.
    keep_none: bool
        When ``True``, keep keys whose values are ``None``; otherwise drop them.
    **fields: Any
        JSON-serializable key/value pairs (non-serializable values are
        stringified).

    The payload is only serialized when ``level`` is enabled, so TRACE events
    cost nothing in production.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "TRACE",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
