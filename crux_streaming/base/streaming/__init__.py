"""Streaming primitives: SSE decoding, cumulative accumulators, finalization."""

from .sse import iter_sse_json, SSE_PREFIX, SSE_TERMINATOR, SSE_FINAL_EVENT
from .accumulators import StreamState, CompletionAccumulator, ChatAccumulator
from .finalize import collect_final

__all__ = [
    "iter_sse_json",
    "SSE_PREFIX",
    "SSE_TERMINATOR",
    "SSE_FINAL_EVENT",
    "StreamState",
    "CompletionAccumulator",
    "ChatAccumulator",
    "collect_final",
]
