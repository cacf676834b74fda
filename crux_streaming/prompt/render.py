"""Prompt rendering.

The adapters depend only on the :class:`Renderer` protocol:

* ``await renderer.render(node)`` returns the prompt as one string.
* ``await renderer.render(node, stop=predicate)`` returns a list of strings
  and the elements for which ``predicate`` returned True, left unrendered.
  The chat adapter uses this to find message boundaries.

:class:`PromptRenderer` implements the protocol for the node types in
:mod:`crux_streaming.prompt.nodes`. A different composition framework can be
plugged in by passing any object with a compatible ``render`` coroutine.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Union, overload, runtime_checkable

from .nodes import Element, Node

StopPredicate = Callable[[Element], bool]
RenderedParts = List[Union[str, Element]]


@runtime_checkable
class Renderer(Protocol):
    async def render(self, node: Node, stop: Optional[StopPredicate] = None) -> Union[str, RenderedParts]:
        ...


class PromptRenderer:
    """Depth-first renderer over prompt nodes."""

    @overload
    async def render(self, node: Node, stop: None = None) -> str: ...

    @overload
    async def render(self, node: Node, stop: StopPredicate) -> RenderedParts: ...

    async def render(self, node: Node, stop: Optional[StopPredicate] = None) -> Union[str, RenderedParts]:
        parts: RenderedParts = []
        await self._render_into(node, stop, parts)
        if stop is None:
            return "".join(parts)  # type: ignore[arg-type]
        return _merge_text(parts)

    async def _render_into(self, node: Node, stop: Optional[StopPredicate], out: RenderedParts) -> None:
        if node is None or isinstance(node, bool):
            return
        if isinstance(node, str):
            out.append(node)
            return
        if isinstance(node, Element):
            if stop is not None and stop(node):
                out.append(node)
                return
            await self._render_into(await node.expand(self), stop, out)
            return
        if isinstance(node, (list, tuple)):
            for child in node:
                await self._render_into(child, stop, out)
            return
        raise TypeError(f"Cannot render prompt node of type {type(node).__name__}")


def _merge_text(parts: RenderedParts) -> RenderedParts:
    """Join adjacent strings so the result alternates text and elements."""
    merged: RenderedParts = []
    for part in parts:
        if isinstance(part, str) and merged and isinstance(merged[-1], str):
            merged[-1] += part
        else:
            merged.append(part)
    return merged


__all__ = ["Renderer", "PromptRenderer", "StopPredicate", "RenderedParts"]
