"""
UpstreamRequestError (single-class module).

Structured error for a non-2xx upstream response. Carries the HTTP status, the
raw response headers and body, and the best-effort parsed JSON error payload so
callers can inspect provider error details programmatically while the message
stays a single readable line.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .classification import RETRYABLE_CODES, classify_status
from .provider_error import ProviderError


@dataclass
class UpstreamRequestError(ProviderError):
    """Non-success HTTP response from the upstream model API.

    Attributes:
        status_code: HTTP status of the failed response.
        body: Raw response body text (fully drained).
        headers: Raw response headers.
        error_response: Parsed JSON body, or ``None`` when the body was not JSON.
    """

    status_code: int = 0
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    error_response: Optional[Dict[str, Any]] = None

    @classmethod
    def from_response(
        cls,
        operation: str,
        status_code: int,
        headers: Mapping[str, str],
        body: str,
        *,
        provider: str = "openai",
        model: Optional[str] = None,
    ) -> "UpstreamRequestError":
        """Build the error from a drained response.

        The parsed ``error.message`` (when it is a non-blank string) is appended
        to the summary line after a colon. A body that is not valid JSON leaves
        ``error_response`` as ``None``.
        """
        error_response: Optional[Dict[str, Any]] = None
        try:
            error_response = json.loads(body)
        except ValueError:
            # Not JSON; the raw body is still attached.
            error_response = None

        suffix = ""
        err = error_response.get("error") if isinstance(error_response, dict) else None
        parsed_message = err.get("message") if isinstance(err, dict) else None
        if isinstance(parsed_message, str) and parsed_message.strip():
            suffix = f": {parsed_message}"

        code = classify_status(status_code)
        return cls(
            code=code,
            message=f"{provider_label(provider)} {operation} request failed with status code {status_code}{suffix}",
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            status_code=status_code,
            body=body,
            headers=dict(headers),
            error_response=error_response,
        )


def provider_label(provider: str) -> str:
    """Return the display name used in error summaries (``openai`` -> ``OpenAI``)."""
    return {"openai": "OpenAI"}.get(provider, provider)


__all__ = ["UpstreamRequestError"]
