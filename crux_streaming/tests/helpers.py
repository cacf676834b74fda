"""Fakes shared by the adapter tests.

``FakeTransport`` replays canned byte chunks for one request and records what
was sent; ``FakeTokenizer`` encodes from a fixed vocabulary. Neither touches
the network.
"""
from __future__ import annotations

import json
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Optional, Sequence

from crux_streaming.base.http import StreamingResponse


def sse(*events: Any) -> bytes:
    """Encode ``events`` as ``data:`` frames; strings are sent verbatim."""
    frames = []
    for event in events:
        text = event if isinstance(event, str) else json.dumps(event)
        frames.append(f"data: {text}\n\n")
    return "".join(frames).encode("utf-8")


def split_every(data: bytes, size: int) -> List[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


async def aiter_chunks(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


def completion_event(text: str) -> Dict[str, Any]:
    return {"id": "cmpl-1", "object": "text_completion", "choices": [{"index": 0, "text": text}]}


def chat_event(**delta: Any) -> Dict[str, Any]:
    return {"id": "chatcmpl-1", "object": "chat.completion.chunk", "choices": [{"index": 0, "delta": delta}]}


@dataclass
class FakeTransport:
    """Single-response transport double.

    Attributes:
        chunks: Body chunks returned for every request.
        status_code: Response status.
        headers: Response headers.
        calls: ``(operation, payload)`` for each request made.
        chunks_read: Number of body chunks pulled by the consumer.
        open: True while a response context is active.
        closed: Number of response contexts exited.
    """

    chunks: Sequence[bytes] = ()
    status_code: int = 200
    headers: Mapping[str, str] = field(default_factory=lambda: {"content-type": "text/event-stream"})
    calls: List[tuple] = field(default_factory=list)
    chunks_read: int = 0
    open: bool = False
    closed: int = 0

    async def _body(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            self.chunks_read += 1
            yield chunk

    @asynccontextmanager
    async def stream(self, operation: str, payload: Dict[str, Any]) -> AsyncIterator[StreamingResponse]:
        self.calls.append((operation, payload))
        self.open = True
        try:
            yield StreamingResponse(status_code=self.status_code, headers=dict(self.headers), body=self._body())
        finally:
            self.open = False
            self.closed += 1


class FakeTokenizer:
    """Vocabulary tokenizer: known strings are one token, others one per character."""

    def __init__(self, vocab: Optional[Mapping[str, int]] = None) -> None:
        self.vocab = dict(vocab or {})

    def encode(self, text: str) -> List[int]:
        if text in self.vocab:
            return [self.vocab[text]]
        return [ord(ch) for ch in text]
