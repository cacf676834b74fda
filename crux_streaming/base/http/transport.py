"""Transport contract and the default httpx implementation.

The adapters never talk to ``httpx`` directly. They call
``transport.stream(operation, payload)`` and receive a
:class:`StreamingResponse` inside an async context manager: status code,
headers, and the body as an async iterator of byte chunks. Leaving the context
releases the connection, which is how an abandoned stream tears down its
socket.

Non-2xx statuses are returned as ordinary responses so the caller can inspect
the status and drain the body; transports must not raise for them.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, AsyncIterator, Dict, Mapping, Optional, Protocol, runtime_checkable

import httpx

from ..errors import ProviderError, classify_exception
from ..errors_parts.classification import RETRYABLE_CODES
from ..errors_parts.error_code import ErrorCode
from .client import get_async_httpx_client


@dataclass
class StreamingResponse:
    """Initial response of a streamed request.

    Attributes:
        status_code: HTTP status.
        body: Single-pass async iterator over raw body chunks.
        headers: Response headers.
    """

    status_code: int
    body: AsyncIterator[bytes]
    headers: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    """Minimal transport surface needed by the streaming adapters."""

    def stream(self, operation: str, payload: Dict[str, Any]) -> AsyncContextManager[StreamingResponse]:
        """Send ``payload`` for ``operation`` and expose the streamed response."""
        ...


class HttpxTransport:
    """OpenAI-style HTTP transport on a pooled ``httpx.AsyncClient``.

    Parameters:
        api_key: Bearer credential; omitted from headers when ``None``.
        base_url: API root, e.g. ``https://api.openai.com/v1``.
        operation_paths: Operation name -> path relative to ``base_url``.
        organization: Optional ``OpenAI-Organization`` header value.
        client: Explicit client (tests use ``httpx.MockTransport``); when
            omitted a pooled client is used.
        provider: Provider key used in wrapped transport errors.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str,
        operation_paths: Mapping[str, str],
        organization: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        provider: str = "openai",
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._paths = dict(operation_paths)
        self._organization = organization
        self._client = client
        self.provider = provider

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "text/event-stream"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        if self._organization:
            headers["OpenAI-Organization"] = self._organization
        return headers

    def _url(self, operation: str) -> str:
        try:
            return self._base_url + self._paths[operation]
        except KeyError:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"Unknown operation {operation!r}",
                provider=self.provider,
            ) from None

    def _wrap(self, exc: httpx.HTTPError, model: Optional[str]) -> ProviderError:
        code = ErrorCode.TIMEOUT if isinstance(exc, httpx.TimeoutException) else classify_exception(exc)
        return ProviderError(
            code=code,
            message=f"{type(exc).__name__}: {exc}",
            provider=self.provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )

    async def _iter_body(self, response: httpx.Response, model: Optional[str]) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise self._wrap(e, model) from e

    @asynccontextmanager
    async def stream(self, operation: str, payload: Dict[str, Any]) -> AsyncIterator[StreamingResponse]:
        url = self._url(operation)
        model = payload.get("model")
        client = self._client or get_async_httpx_client(None, purpose=f"{self.provider}.stream")
        request = client.build_request("POST", url, json=payload, headers=self._headers())
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise self._wrap(e, model) from e
        body = self._iter_body(response, model)
        try:
            yield StreamingResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=body,
            )
        finally:
            await body.aclose()
            await response.aclose()


__all__ = ["StreamingResponse", "Transport", "HttpxTransport"]
