"""Prompt node types.

A prompt is a tree of nodes:

- ``str`` renders as itself.
- ``None`` and booleans render as nothing (handy for conditional parts).
- lists/tuples render as the concatenation of their items.
- :class:`Element` renders its ``children`` (or whatever :meth:`Element.expand`
  returns).

Chat prompts are built from exactly three message elements:
:class:`SystemMessage`, :class:`UserMessage` and :class:`AssistantMessage`.
They share :class:`MessageElement`; its ``role`` class attribute is what the
chat adapter dispatches on.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Sequence, Tuple, Union

from ..base.models import Role

if TYPE_CHECKING:
    from .render import Renderer

Node = Union[str, "Element", Sequence[Any], bool, None]


@dataclass(frozen=True)
class Element:
    """A structural prompt node.

    Subclasses that compute their content (lookups, templating) override
    :meth:`expand`; the default renders ``children`` unchanged.
    """

    children: Node = None

    @property
    def tag(self) -> str:
        return type(self).__name__

    async def expand(self, renderer: "Renderer") -> Node:
        return self.children


@dataclass(frozen=True)
class MessageElement(Element):
    """Base of the three chat message variants."""

    role: ClassVar[Role]


@dataclass(frozen=True)
class SystemMessage(MessageElement):
    role: ClassVar[Role] = "system"


@dataclass(frozen=True)
class UserMessage(MessageElement):
    """A user turn; ``name`` is passed through to the API unchanged."""

    role: ClassVar[Role] = "user"
    name: Optional[str] = None


@dataclass(frozen=True)
class AssistantMessage(MessageElement):
    role: ClassVar[Role] = "assistant"


MESSAGE_TYPES: Tuple[type, ...] = (SystemMessage, UserMessage, AssistantMessage)


def is_message(element: Element) -> bool:
    """Stop predicate halting rendering at chat message boundaries."""
    return isinstance(element, MESSAGE_TYPES)


__all__ = [
    "Node",
    "Element",
    "MessageElement",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "MESSAGE_TYPES",
    "is_message",
]
