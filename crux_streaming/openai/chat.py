"""Streamed ``createChatCompletion`` adapter.

The prompt is rendered up to message boundaries; each message node becomes one
role-tagged :class:`~crux_streaming.base.models.Message`. Only the three chat
message variants are accepted. Text that sits between message nodes is
dropped.

The generator yields the empty placeholder once the request body is built,
then the cumulative assistant content after every content delta.
:func:`chat_message` returns the finished message with its streamed role.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import Any, AsyncGenerator, List, Optional

from ..base.dto import ModelProps
from ..base.errors import InvalidPromptStructure
from ..base.http import Transport, check_response
from ..base.logging import TRACE, LogContext, get_logger, log_event
from ..base.models import Message
from ..base.streaming import ChatAccumulator, collect_final, iter_sse_json
from ..base.tokens import Tokenizer
from ..prompt import MESSAGE_TYPES, Element, Node, PromptRenderer, Renderer, UserMessage, is_message
from .context import get_transport
from .requests import CREATE_CHAT_COMPLETION, build_chat_payload

PROVIDER = "openai"


def _tag_of(node: Any) -> str:
    if isinstance(node, Element):
        return node.tag
    return type(node).__name__


async def render_messages(renderer: Renderer, prompt: Node, *, model: Optional[str] = None) -> List[Message]:
    """Render ``prompt`` into chat messages, preserving order.

    Raises:
        InvalidPromptStructure: a rendered node is not a chat message.
    """
    parts = await renderer.render(prompt, stop=is_message)
    if isinstance(parts, str):
        # No message boundary was reached; the whole prompt is loose text.
        parts = [parts]
    elements = [part for part in parts if not isinstance(part, str)]
    for element in elements:
        if not isinstance(element, MESSAGE_TYPES):
            raise InvalidPromptStructure.for_tag(_tag_of(element), provider=PROVIDER, model=model)

    async def build(element) -> Message:
        content = await renderer.render(element)
        name = element.name if isinstance(element, UserMessage) else None
        return Message(role=element.role, content=content, name=name)

    return list(await asyncio.gather(*(build(element) for element in elements)))


async def _stream_chat(
    props: ModelProps,
    prompt: Node,
    accumulator: ChatAccumulator,
    *,
    renderer: Optional[Renderer],
    transport: Optional[Transport],
    tokenizer: Optional[Tokenizer],
    logger: Optional[logging.Logger],
) -> AsyncGenerator[str, None]:
    logger = logger or get_logger("providers.openai")
    ctx = LogContext(provider=PROVIDER, model=props.model, operation=CREATE_CHAT_COMPLETION)
    try:
        messages = await render_messages(renderer or PromptRenderer(), prompt, model=props.model)
        payload = build_chat_payload(props, messages, tokenizer=tokenizer)
    except Exception:
        accumulator.fail()
        raise

    yield ""

    log_event(logger, f"{CREATE_CHAT_COMPLETION}.request", ctx, level=logging.DEBUG, request=payload)
    try:
        async with (transport or get_transport()).stream(CREATE_CHAT_COMPLETION, payload) as response:
            await check_response(response, logger, CREATE_CHAT_COMPLETION, ctx)
            accumulator.begin()
            async with aclosing(iter_sse_json(response.body, provider=PROVIDER, model=props.model)) as events:
                async for event in events:
                    log_event(logger, f"{CREATE_CHAT_COMPLETION}.event", ctx, level=TRACE, data=event)
                    content = accumulator.feed(event)
                    if content is not None:
                        yield content

        accumulator.finish()
    except Exception:
        accumulator.fail()
        raise
    log_event(
        logger,
        f"{CREATE_CHAT_COMPLETION}.finished",
        ctx,
        level=logging.DEBUG,
        message=accumulator.message.to_dict(),
    )


def stream_chat_completion(
    props: ModelProps,
    prompt: Node,
    *,
    renderer: Optional[Renderer] = None,
    transport: Optional[Transport] = None,
    tokenizer: Optional[Tokenizer] = None,
    logger: Optional[logging.Logger] = None,
) -> AsyncGenerator[str, None]:
    """Stream a chat completion of ``prompt``.

    Same parameters and error behaviour as
    :func:`crux_streaming.openai.completion.stream_completion`, plus
    ``InvalidPromptStructure`` when the prompt holds a non-message node.
    Prompt and bias errors surface before the placeholder is yielded.
    """
    return _stream_chat(
        props,
        prompt,
        ChatAccumulator(),
        renderer=renderer,
        transport=transport,
        tokenizer=tokenizer,
        logger=logger,
    )


async def chat_complete(props: ModelProps, prompt: Node, **kwargs) -> str:
    """Run :func:`stream_chat_completion` to the end and return the content."""
    return await collect_final(stream_chat_completion(props, prompt, **kwargs), default="")


async def chat_message(
    props: ModelProps,
    prompt: Node,
    *,
    renderer: Optional[Renderer] = None,
    transport: Optional[Transport] = None,
    tokenizer: Optional[Tokenizer] = None,
    logger: Optional[logging.Logger] = None,
) -> Message:
    """Run a chat completion and return the assembled message (role included)."""
    accumulator = ChatAccumulator()
    stream = _stream_chat(
        props,
        prompt,
        accumulator,
        renderer=renderer,
        transport=transport,
        tokenizer=tokenizer,
        logger=logger,
    )
    await collect_final(stream)
    return accumulator.message


__all__ = ["render_messages", "stream_chat_completion", "chat_complete", "chat_message"]
