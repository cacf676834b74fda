"""Shared async HTTP client pool for the streaming transport.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances to
    avoid per-call allocations and reduce connection overhead. Timeouts derive
    exclusively from :func:`get_timeout_config`; no numeric literals are
    introduced here.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached per running event loop, then by a composite key of
      ``base_url`` and ``purpose``. Purposes allow distinct pools (e.g.,
      "openai.stream" vs tests).
    - An ``AsyncClient``'s connections belong to the loop that opened them, so
      each loop gets its own clients. A loop's entries are dropped when the
      loop is garbage collected; sequential ``asyncio.run`` calls never share
      a client.
    - Async clients must be closed from a running event loop, so there is no
      ``atexit`` hook; applications call :func:`aclose_all_clients` during
      shutdown, from the loop that used them.
"""

from __future__ import annotations

import asyncio
import threading
import weakref
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config, to_httpx_timeout

_ClientKey = Tuple[Optional[str], str]

# Running loop -> {(base_url, purpose): client}
_CLIENTS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[_ClientKey, httpx.AsyncClient]]" = (
    weakref.WeakKeyDictionary()
)
_LOCK = threading.RLock()


def get_async_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Must be called from a running event loop. The first request for a key on
    that loop creates a client configured with timeouts from
    :func:`get_timeout_config`. Subsequent requests on the same loop reuse the
    same instance unless it has been closed.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.

    Raises:
        RuntimeError: no event loop is running.
    """
    loop = asyncio.get_running_loop()
    key = (base_url, purpose)
    with _LOCK:
        clients = _CLIENTS.setdefault(loop, {})
        client = clients.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = to_httpx_timeout(get_timeout_config())
        client = httpx.AsyncClient(base_url=base_url, timeout=timeout) if base_url else httpx.AsyncClient(timeout=timeout)
        clients[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close and clear the pooled HTTP clients of the running loop."""
    with _LOCK:
        clients = list(_CLIENTS.pop(asyncio.get_running_loop(), {}).values())
    for c in clients:
        await c.aclose()


__all__ = ["get_async_httpx_client", "aclose_all_clients"]
