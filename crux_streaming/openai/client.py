"""OpenAI provider facade.

Bundles the defaults shared by a group of invocations (models, sampling
parameters, transport, renderer) so call sites only pass the prompt:

    provider = OpenAIProvider(temperature=0)
    async for text in provider.stream_chat(UserMessage("Hello")):
        ...

Model defaults come from ``get_provider_config("openai")`` when not given.
A transport passed here applies to this provider's calls only; otherwise the
context-bound transport is used at call time.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, List, Optional, Union

from ..base.dto import ModelProps
from ..base.http import Transport
from ..base.logging import get_logger
from ..base.models import Message
from ..base.streaming import collect_final
from ..base.tokens import Tokenizer
from ..config import get_provider_config
from ..prompt import Node, Renderer
from .chat import chat_message, stream_chat_completion
from .completion import stream_completion

__all__ = ["OpenAIProvider"]


class OpenAIProvider:
    """Streaming OpenAI adapter with shared model defaults."""

    def __init__(
        self,
        chat_model: Optional[str] = None,
        completion_model: Optional[str] = None,
        *,
        transport: Optional[Transport] = None,
        renderer: Optional[Renderer] = None,
        tokenizer: Optional[Tokenizer] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        stop: Optional[Union[str, List[str]]] = None,
    ) -> None:
        cfg = get_provider_config("openai")
        self.chat_model = chat_model or cfg["chat_model"]
        self.completion_model = completion_model or cfg["completion_model"]
        self._transport = transport
        self._renderer = renderer
        self._tokenizer = tokenizer
        self._sampling = {"max_tokens": max_tokens, "temperature": temperature, "stop": stop}
        self._logger = get_logger("providers.openai")

    @property
    def provider_name(self) -> str:
        return "openai"

    def props(self, model: str, **overrides) -> ModelProps:
        """Build validated :class:`ModelProps`; per-call ``overrides`` win."""
        return ModelProps(model=model, **self._sampling).merged(**overrides)

    def _options(self, logger: Optional[logging.Logger] = None) -> dict:
        return {
            "renderer": self._renderer,
            "transport": self._transport,
            "tokenizer": self._tokenizer,
            "logger": logger or self._logger,
        }

    def stream_completion(self, prompt: Node, **overrides) -> AsyncGenerator[str, None]:
        """Stream cumulative completion text for ``prompt``."""
        props = self.props(overrides.pop("model", None) or self.completion_model, **overrides)
        return stream_completion(props, prompt, **self._options())

    def stream_chat(self, prompt: Node, **overrides) -> AsyncGenerator[str, None]:
        """Stream cumulative assistant content for a chat ``prompt``."""
        props = self.props(overrides.pop("model", None) or self.chat_model, **overrides)
        return stream_chat_completion(props, prompt, **self._options())

    async def complete(self, prompt: Node, **overrides) -> str:
        return await collect_final(self.stream_completion(prompt, **overrides), default="")

    async def chat(self, prompt: Node, **overrides) -> str:
        return await collect_final(self.stream_chat(prompt, **overrides), default="")

    async def chat_message(self, prompt: Node, **overrides) -> Message:
        """Like :meth:`chat` but returns the message with its streamed role."""
        props = self.props(overrides.pop("model", None) or self.chat_model, **overrides)
        return await chat_message(props, prompt, **self._options())
