"""Prompt nodes and the renderer that turns them into request text."""

from .nodes import (
    Node,
    Element,
    MessageElement,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    MESSAGE_TYPES,
    is_message,
)
from .render import Renderer, PromptRenderer, StopPredicate

__all__ = [
    "Node",
    "Element",
    "MessageElement",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "MESSAGE_TYPES",
    "is_message",
    "Renderer",
    "PromptRenderer",
    "StopPredicate",
]
