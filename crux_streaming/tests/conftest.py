"""Pytest configuration for the streaming adapter test suite.

Isolates every test from the developer's environment (OpenAI variables, config
file, ``.env``) and from cached module state, and offers a fixture capturing
records from the shared ``providers`` logger, which does not propagate to the
root logger.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from crux_streaming.base.logging import BASE_LOGGER_NAME, TRACE, get_logger
from crux_streaming.config import reset_config_cache
from crux_streaming.openai.context import reset_default_transport

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_CHAT_MODEL",
    "OPENAI_COMPLETION_MODEL",
    "OPENAI_ORGANIZATION",
    "PROVIDERS_CONFIG_FILE",
    "PROVIDERS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear provider env vars and config caches around each test."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    reset_default_transport()
    yield
    reset_config_cache()
    reset_default_transport()


@pytest.fixture()
def log_records(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Capture every record reaching the ``providers`` logger, down to TRACE.

    The level comes from ``PROVIDERS_LOG_LEVEL`` because ``get_logger`` re-applies
    it on every call.
    """

    monkeypatch.setenv("PROVIDERS_LOG_LEVEL", "TRACE")
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=TRACE)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    base = get_logger(BASE_LOGGER_NAME)
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        monkeypatch.delenv("PROVIDERS_LOG_LEVEL", raising=False)
        get_logger(BASE_LOGGER_NAME)
