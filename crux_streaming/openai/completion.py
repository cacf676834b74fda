"""Streamed ``createCompletion`` adapter.

Yields cumulative text: first an empty placeholder (before any network
activity), then the full-so-far completion after every stream event. The last
value yielded is the completion.
"""
from __future__ import annotations

import logging
from contextlib import aclosing
from typing import AsyncGenerator, Optional

from ..base.dto import ModelProps
from ..base.http import Transport, check_response
from ..base.logging import TRACE, LogContext, get_logger, log_event
from ..base.streaming import CompletionAccumulator, collect_final, iter_sse_json
from ..base.tokens import Tokenizer
from ..prompt import Node, PromptRenderer, Renderer
from .context import get_transport
from .requests import CREATE_COMPLETION, build_completion_payload

PROVIDER = "openai"


async def _stream_completion(
    props: ModelProps,
    prompt: Node,
    accumulator: CompletionAccumulator,
    *,
    renderer: Optional[Renderer],
    transport: Optional[Transport],
    tokenizer: Optional[Tokenizer],
    logger: Optional[logging.Logger],
) -> AsyncGenerator[str, None]:
    yield ""

    logger = logger or get_logger("providers.openai")
    ctx = LogContext(provider=PROVIDER, model=props.model, operation=CREATE_COMPLETION)
    try:
        text = await (renderer or PromptRenderer()).render(prompt)
        payload = build_completion_payload(props, text, tokenizer=tokenizer)
        log_event(logger, f"{CREATE_COMPLETION}.request", ctx, level=logging.DEBUG, request=payload)

        async with (transport or get_transport()).stream(CREATE_COMPLETION, payload) as response:
            await check_response(response, logger, CREATE_COMPLETION, ctx)
            accumulator.begin()
            async with aclosing(iter_sse_json(response.body, provider=PROVIDER, model=props.model)) as events:
                async for event in events:
                    log_event(logger, f"{CREATE_COMPLETION}.event", ctx, level=TRACE, data=event)
                    yield accumulator.feed(event)

        completion = accumulator.finish()
    except Exception:
        accumulator.fail()
        raise
    log_event(logger, f"{CREATE_COMPLETION}.finished", ctx, level=logging.DEBUG, completion=completion)


def stream_completion(
    props: ModelProps,
    prompt: Node,
    *,
    renderer: Optional[Renderer] = None,
    transport: Optional[Transport] = None,
    tokenizer: Optional[Tokenizer] = None,
    logger: Optional[logging.Logger] = None,
) -> AsyncGenerator[str, None]:
    """Stream a text completion of ``prompt``.

    Parameters:
        props: Model id and sampling parameters (``logit_bias`` keyed by
            literal token strings).
        prompt: Prompt node tree, rendered to a single string.
        renderer: Renderer for ``prompt``; defaults to :class:`PromptRenderer`.
        transport: Explicit transport; defaults to the context-bound one.
        tokenizer: Tokenizer for logit bias; defaults to the model's tiktoken encoding.
        logger: Adapter logger; defaults to ``providers.openai``.

    Raises (while iterating):
        InvalidTokenBias, UpstreamRequestError, MalformedStreamError, or a
        transport ``ProviderError``. Values already yielded stay valid; no
        further values follow an error.

    Close the generator (``aclose()`` or ``contextlib.aclosing``) when
    abandoning it early so the connection is released promptly.
    """
    return _stream_completion(
        props,
        prompt,
        CompletionAccumulator(),
        renderer=renderer,
        transport=transport,
        tokenizer=tokenizer,
        logger=logger,
    )


async def complete(props: ModelProps, prompt: Node, **kwargs) -> str:
    """Run :func:`stream_completion` to the end and return the completion text."""
    return await collect_final(stream_completion(props, prompt, **kwargs), default="")


__all__ = ["stream_completion", "complete"]
