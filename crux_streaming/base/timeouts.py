"""Unified timeout configuration for the streaming transport.

Centralizes timeout values used by the HTTP transport so no module introduces
ad-hoc numeric literals.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the relevant variables change). Supported
    environment variables (all optional):
        PT_TIMEOUT_CONNECT_SECONDS
        PT_TIMEOUT_STREAM_SECONDS
        PT_TIMEOUT_HTTP_SECONDS

to_httpx_timeout(cfg)
    Maps the configuration onto an ``httpx.Timeout``. The read timeout is the
    stream idle timeout: it bounds the wait for each next body chunk, not the
    whole response.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Timeout for establishing the connection.
        stream_timeout_seconds: Idle timeout while waiting for the next body
            chunk during streaming.
        http_timeout_seconds: Baseline timeout for writes and pool acquisition.
    """

    connect_timeout_seconds: float = 10.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = ("PT_TIMEOUT_CONNECT_SECONDS", "PT_TIMEOUT_STREAM_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, else return ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", 10.0),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = guard
    return _CACHED


def to_httpx_timeout(cfg: TimeoutConfig | None = None) -> httpx.Timeout:
    cfg = cfg or get_timeout_config()
    return httpx.Timeout(
        cfg.http_timeout_seconds,
        connect=cfg.connect_timeout_seconds,
        read=cfg.stream_timeout_seconds,
    )


__all__ = ["TimeoutConfig", "get_timeout_config", "to_httpx_timeout"]
