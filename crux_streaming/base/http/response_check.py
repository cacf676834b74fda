"""Status check for streamed responses.

``check_response`` runs between the transport and the SSE decoder. A success
status only logs. A failure status drains the body (so it is no longer
available for event decoding) and raises :class:`UpstreamRequestError` with
the parsed provider error payload attached.
"""
from __future__ import annotations

import logging

from ..errors import UpstreamRequestError
from ..logging import LogContext, log_event
from .transport import StreamingResponse


async def read_body_text(response: StreamingResponse) -> str:
    """Drain the response body and decode it as UTF-8 text."""
    chunks = [chunk async for chunk in response.body]
    return b"".join(chunks).decode("utf-8", errors="replace")


async def check_response(
    response: StreamingResponse,
    logger: logging.Logger,
    operation: str,
    ctx: LogContext | None = None,
) -> None:
    """Raise :class:`UpstreamRequestError` unless ``response`` is 2xx.

    Parameters:
        response: The streamed response; its body is consumed on failure only.
        logger: Adapter logger.
        operation: Operation name (``createCompletion``/``createChatCompletion``)
            used in the log event and error message.
        ctx: Optional log context; its provider/model are copied onto the error.
    """
    status = response.status_code
    if 200 <= status < 300:
        log_event(logger, f"{operation}.succeeded", ctx, status_code=status, headers=dict(response.headers))
        return

    body = await read_body_text(response)
    log_event(logger, f"{operation}.failed", ctx, level=logging.WARNING, status_code=status)
    raise UpstreamRequestError.from_response(
        operation,
        status,
        response.headers,
        body,
        provider=(ctx.provider if ctx and ctx.provider else "openai"),
        model=ctx.model if ctx else None,
    )


__all__ = ["check_response", "read_body_text"]
