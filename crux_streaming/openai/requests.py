"""Request payload builders for the two streamed OpenAI operations."""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..base.dto import ModelProps
from ..base.models import Message
from ..base.tokens import Tokenizer, logit_bias_of_tokens

CREATE_COMPLETION = "createCompletion"
CREATE_CHAT_COMPLETION = "createChatCompletion"


def _with_bias(payload: Dict[str, Any], props: ModelProps, tokenizer: Optional[Tokenizer]) -> Dict[str, Any]:
    if props.logit_bias:
        payload["logit_bias"] = logit_bias_of_tokens(props.logit_bias, tokenizer=tokenizer, model=props.model)
    payload["stream"] = True
    return payload


def build_completion_payload(props: ModelProps, prompt: str, *, tokenizer: Optional[Tokenizer] = None) -> Dict[str, Any]:
    """``createCompletion`` body. ``logit_bias`` is present only when requested.

    Raises:
        InvalidTokenBias: a bias key is not exactly one token.
    """
    payload = props.sampling_params()
    payload["prompt"] = prompt
    return _with_bias(payload, props, tokenizer)


def build_chat_payload(
    props: ModelProps,
    messages: Sequence[Message],
    *,
    tokenizer: Optional[Tokenizer] = None,
) -> Dict[str, Any]:
    """``createChatCompletion`` body.

    Raises:
        InvalidTokenBias: a bias key is not exactly one token.
    """
    payload = props.sampling_params()
    payload["messages"] = [m.to_dict() for m in messages]
    return _with_bias(payload, props, tokenizer)


__all__ = [
    "CREATE_COMPLETION",
    "CREATE_CHAT_COMPLETION",
    "build_completion_payload",
    "build_chat_payload",
]
