"""Cumulative result assembly for streamed completions.

Each accumulator folds decoded stream events into the full-so-far value and
tracks its lifecycle:

    STARTED -> STREAMING -> DONE
                   \\-> FAILED   (from STARTED or STREAMING)

Accumulators are request-scoped and owned by a single invocation. They do no
I/O; the adapters drive them and yield what ``feed`` returns.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from ..models import Message, Role


class StreamState(str, Enum):
    """Lifecycle of one streamed invocation."""

    STARTED = "started"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


class _Accumulator:
    def __init__(self) -> None:
        self.state = StreamState.STARTED

    def begin(self) -> None:
        """Enter ``STREAMING`` once the upstream response has been accepted."""
        if self.state is not StreamState.STARTED:
            raise RuntimeError(f"cannot begin streaming from state {self.state.value}")
        self.state = StreamState.STREAMING

    def fail(self) -> None:
        self.state = StreamState.FAILED

    def _require_streaming(self) -> None:
        if self.state is not StreamState.STREAMING:
            raise RuntimeError(f"cannot accept events in state {self.state.value}")


def _first_choice(event: Mapping[str, Any]) -> Mapping[str, Any]:
    choices = event.get("choices") or [{}]
    return choices[0] or {}


class CompletionAccumulator(_Accumulator):
    """Plain-text completion: concatenates ``choices[0].text`` fragments."""

    def __init__(self) -> None:
        super().__init__()
        self.text = ""

    def feed(self, event: Mapping[str, Any]) -> str:
        """Append the event's text and return the new cumulative string."""
        self._require_streaming()
        self.text += _first_choice(event).get("text") or ""
        return self.text

    def finish(self) -> str:
        self._require_streaming()
        self.state = StreamState.DONE
        return self.text


class ChatAccumulator(_Accumulator):
    """Chat completion: merges ``choices[0].delta`` role/content fragments.

    The role is taken from the first delta that carries one; later role
    deltas are ignored. Content only ever grows.
    """

    def __init__(self) -> None:
        super().__init__()
        self.role: Optional[Role] = None
        self.content = ""

    def feed(self, event: Mapping[str, Any]) -> Optional[str]:
        """Merge one delta.

        Returns the new cumulative content when the delta carried content,
        otherwise ``None`` (nothing to emit).
        """
        self._require_streaming()
        delta = _first_choice(event).get("delta") or {}
        if delta.get("role") and self.role is None:
            self.role = delta["role"]
        if delta.get("content"):
            self.content += delta["content"]
            return self.content
        return None

    def finish(self) -> str:
        self._require_streaming()
        self.state = StreamState.DONE
        return self.content

    @property
    def message(self) -> Message:
        """The assembled message; an unset role reads as ``assistant``."""
        return Message(role=self.role or "assistant", content=self.content)


__all__ = ["StreamState", "CompletionAccumulator", "ChatAccumulator"]
