"""
Error classification helpers mapping HTTP statuses and exceptions to
normalized ErrorCode values.

Implements status-to-code mapping for upstream responses and a small
message heuristic fallback for transport exceptions that carry no status.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

RETRYABLE_CODES = frozenset({ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE})


def classify_status(status: int) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode`.

    Unlisted 5xx statuses fall back to ``SERVER_ERROR``; everything else that is
    not explicitly mapped is ``UNKNOWN``.
    """
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without an HTTP status."""
    PATTERN_GROUPS = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.TRANSIENT, ("connection reset", "connection refused", "remote protocol")),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions.
        3. ``status_code`` attribute (or ``response.status_code``).
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(getattr(exc, "response", None), "status_code", None)
    if isinstance(status, int) and 100 <= status < 600:
        return classify_status(status)
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_status",
    "classify_exception",
    "RETRYABLE_CODES",
    "_HTTP_STATUS_MAP",
]
