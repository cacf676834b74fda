"""Drain a cumulative-result stream down to its final value."""
from __future__ import annotations

from contextlib import aclosing
from typing import AsyncGenerator, Optional, TypeVar

T = TypeVar("T")


async def collect_final(stream: AsyncGenerator[T, None], default: Optional[T] = None) -> Optional[T]:
    """Consume ``stream`` and return the last value it yielded.

    The generator is closed even if the caller's task is cancelled, so the
    underlying connection is released. Errors raised by the stream propagate;
    there is no partial result on failure.
    """
    last = default
    async with aclosing(stream) as values:
        async for value in values:
            last = value
    return last


__all__ = ["collect_final"]
