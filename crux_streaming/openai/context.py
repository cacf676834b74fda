"""Scoped OpenAI transport selection.

The active :class:`~crux_streaming.base.http.Transport` lives in a
``ContextVar`` so a caller can bind a different client (credentials, base URL,
test double) for one block of code, and any task started inside it, without
touching process-wide state:

    with use_transport(HttpxTransport(api_key=..., ...)):
        text = await complete(props, prompt)

Outside any binding, a default transport is built lazily from
``get_provider_config("openai")`` and reused afterwards.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from ..base.http import HttpxTransport, Transport
from ..config import get_provider_config
from ..config.defaults import OPENAI_OPERATION_PATHS

_TRANSPORT_VAR: ContextVar[Optional[Transport]] = ContextVar("crux_openai_transport", default=None)
_DEFAULT: Optional[Transport] = None
_LOCK = threading.Lock()


def transport_from_config(**overrides) -> HttpxTransport:
    """Build an :class:`HttpxTransport` from merged provider configuration."""
    cfg = get_provider_config("openai", overrides or None)
    return HttpxTransport(
        api_key=cfg.get("api_key"),
        base_url=cfg["base_url"],
        operation_paths=OPENAI_OPERATION_PATHS,
        organization=cfg.get("organization"),
    )


def get_transport() -> Transport:
    """Return the transport bound for the current context, else the default."""
    bound = _TRANSPORT_VAR.get()
    if bound is not None:
        return bound
    global _DEFAULT
    with _LOCK:
        if _DEFAULT is None:
            _DEFAULT = transport_from_config()
        return _DEFAULT


@contextmanager
def use_transport(transport: Transport) -> Iterator[Transport]:
    """Bind ``transport`` for the duration of the ``with`` block."""
    token = _TRANSPORT_VAR.set(transport)
    try:
        yield transport
    finally:
        _TRANSPORT_VAR.reset(token)


def reset_default_transport() -> None:
    """Drop the lazily built default (e.g. after changing configuration)."""
    global _DEFAULT
    with _LOCK:
        _DEFAULT = None


__all__ = ["get_transport", "use_transport", "transport_from_config", "reset_default_transport"]
