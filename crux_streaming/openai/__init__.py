"""
OpenAI streaming adapters.

Exports:
- OpenAIProvider: facade holding model defaults
- stream_completion / complete: ``createCompletion``
- stream_chat_completion / chat_complete / chat_message: ``createChatCompletion``
- use_transport / get_transport: scoped transport selection
"""

from .client import OpenAIProvider
from .completion import stream_completion, complete
from .chat import stream_chat_completion, chat_complete, chat_message, render_messages
from .context import get_transport, use_transport, transport_from_config, reset_default_transport
from .requests import (
    CREATE_COMPLETION,
    CREATE_CHAT_COMPLETION,
    build_completion_payload,
    build_chat_payload,
)

__all__ = [
    "OpenAIProvider",
    "stream_completion",
    "complete",
    "stream_chat_completion",
    "chat_complete",
    "chat_message",
    "render_messages",
    "get_transport",
    "use_transport",
    "transport_from_config",
    "reset_default_transport",
    "CREATE_COMPLETION",
    "CREATE_CHAT_COMPLETION",
    "build_completion_payload",
    "build_chat_payload",
]
