"""crux_streaming package

Streaming adapters for the OpenAI completion endpoints.

Purpose:
    Turn a prompt tree into a streamed ``createCompletion`` or
    ``createChatCompletion`` request and expose the response as an async
    iterator of cumulative text, with a structured error taxonomy for
    everything that can go wrong on the way.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and the
      streaming-specific subclasses
    - Adapters: :class:`OpenAIProvider`, :func:`stream_completion`,
      :func:`stream_chat_completion`, :func:`complete`, :func:`chat_complete`
    - Prompt nodes: :class:`SystemMessage`, :class:`UserMessage`,
      :class:`AssistantMessage`, :class:`Element`
"""

from .base.errors import (
    ProviderError,
    ErrorCode,
    InvalidTokenBias,
    InvalidPromptStructure,
    UpstreamRequestError,
    MalformedStreamError,
)
from .base.dto import ModelProps
from .base.models import Message
from .base.http import HttpxTransport, StreamingResponse, Transport, aclose_all_clients
from .openai import (
    OpenAIProvider,
    stream_completion,
    complete,
    stream_chat_completion,
    chat_complete,
    chat_message,
    use_transport,
)
from .prompt import Element, SystemMessage, UserMessage, AssistantMessage, PromptRenderer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "InvalidTokenBias",
    "InvalidPromptStructure",
    "UpstreamRequestError",
    "MalformedStreamError",
    "ModelProps",
    "Message",
    "HttpxTransport",
    "StreamingResponse",
    "Transport",
    "aclose_all_clients",
    "OpenAIProvider",
    "stream_completion",
    "complete",
    "stream_chat_completion",
    "chat_complete",
    "chat_message",
    "use_transport",
    "Element",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "PromptRenderer",
]
