"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_streaming.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, classify_status
from .invalid_token_bias import InvalidTokenBias
from .invalid_prompt_structure import InvalidPromptStructure
from .upstream_request_error import UpstreamRequestError
from .malformed_stream_error import MalformedStreamError

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_status",
    "InvalidTokenBias",
    "InvalidPromptStructure",
    "UpstreamRequestError",
    "MalformedStreamError",
]
