"""MalformedStreamError (single-class module)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class MalformedStreamError(ProviderError):
    """An SSE ``data:`` frame whose payload is not valid JSON.

    Attributes:
        payload: The offending frame payload (prefix stripped).
    """

    payload: str = ""

    @classmethod
    def for_payload(
        cls,
        payload: str,
        exc: Exception,
        *,
        provider: str = "openai",
        model: Optional[str] = None,
    ) -> "MalformedStreamError":
        return cls(
            code=ErrorCode.MALFORMED_STREAM,
            message=f"Stream event payload is not valid JSON: {exc}",
            provider=provider,
            model=model,
            raw=exc,
            payload=payload,
        )


__all__ = ["MalformedStreamError"]
