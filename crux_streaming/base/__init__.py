"""
Streaming Base Package

Provider-agnostic building blocks used by the model adapters:
- Errors: normalized taxonomy rooted at ``ProviderError``
- Models/DTOs: chat ``Message`` and validated ``ModelProps``
- HTTP: transport contract, httpx transport, response status check
- Streaming: SSE decoding and cumulative accumulators
- Tokens: logit-bias encoding
- Logging: shared structured ``providers`` logger
"""

from .errors import (
    ErrorCode,
    ProviderError,
    InvalidTokenBias,
    InvalidPromptStructure,
    UpstreamRequestError,
    MalformedStreamError,
)
from .models import Message, Role
from .dto import ModelProps
from .http import StreamingResponse, Transport, HttpxTransport, check_response
from .streaming import (
    iter_sse_json,
    StreamState,
    CompletionAccumulator,
    ChatAccumulator,
    collect_final,
)
from .tokens import logit_bias_of_tokens
from .logging import TRACE, LogContext, get_logger, log_event

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "InvalidTokenBias",
    "InvalidPromptStructure",
    "UpstreamRequestError",
    "MalformedStreamError",
    # Models
    "Message",
    "Role",
    "ModelProps",
    # HTTP
    "StreamingResponse",
    "Transport",
    "HttpxTransport",
    "check_response",
    # Streaming
    "iter_sse_json",
    "StreamState",
    "CompletionAccumulator",
    "ChatAccumulator",
    "collect_final",
    # Tokens
    "logit_bias_of_tokens",
    # Logging
    "TRACE",
    "LogContext",
    "get_logger",
    "log_event",
]
