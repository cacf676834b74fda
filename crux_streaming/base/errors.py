"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_streaming.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, classify_status
from .errors_parts.invalid_token_bias import InvalidTokenBias
from .errors_parts.invalid_prompt_structure import InvalidPromptStructure
from .errors_parts.upstream_request_error import UpstreamRequestError
from .errors_parts.malformed_stream_error import MalformedStreamError

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
