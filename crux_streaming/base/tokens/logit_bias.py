"""Logit-bias encoding.

The API keys ``logit_bias`` by token id, while callers think in literal
strings. :func:`logit_bias_of_tokens` converts one to the other using the
model family's tiktoken encoding and refuses any string that is not exactly one
token: biasing only the first sub-token of a longer string would silently do
something other than what was asked.

Tokenizers are cached per encoding for the life of the process and never mutated,
so concurrent invocations share them freely.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

import tiktoken
from tiktoken.model import encoding_name_for_model

from ...config.defaults import DEFAULT_BIAS_ENCODING
from ..errors import InvalidTokenBias

Bias = Union[int, float]


@runtime_checkable
class Tokenizer(Protocol):
    """Anything that can turn text into token ids."""

    def encode(self, text: str) -> List[int]:
        ...


class TiktokenTokenizer:
    """Tokenizer adapter over a ``tiktoken.Encoding``.

    Special tokens (``<|endoftext|>``) are encoded to their single id so they
    can be biased like any other token.
    """

    def __init__(self, encoding: tiktoken.Encoding) -> None:
        self.encoding = encoding

    def encode(self, text: str) -> List[int]:
        return self.encoding.encode(text, allowed_special="all")


def encoding_name(model: Optional[str] = None) -> str:
    """Name of the tiktoken encoding used for ``model``.

    Models tiktoken does not know fall back to the GPT-3 BPE
    (``DEFAULT_BIAS_ENCODING``).
    """
    if model:
        try:
            return encoding_name_for_model(model)
        except KeyError:
            pass
    return DEFAULT_BIAS_ENCODING


@lru_cache(maxsize=None)
def _tokenizer_for_encoding(name: str) -> TiktokenTokenizer:
    return TiktokenTokenizer(tiktoken.get_encoding(name))


def get_tokenizer(model: Optional[str] = None) -> TiktokenTokenizer:
    """Return the cached tokenizer for ``model``.

    The cache is keyed by encoding name, so it stays as small as the set of
    tiktoken encodings however many model ids callers pass.
    """
    return _tokenizer_for_encoding(encoding_name(model))


def logit_bias_of_tokens(
    tokens: Mapping[str, Bias],
    *,
    tokenizer: Optional[Tokenizer] = None,
    model: Optional[str] = None,
    provider: str = "openai",
) -> Dict[int, Bias]:
    """Map literal token strings to token-id keyed biases.

    Parameters:
        tokens: Literal token string -> bias (typically -100..100; not enforced).
        tokenizer: Explicit tokenizer; defaults to :func:`get_tokenizer` for ``model``.
        model: Model id used to pick the encoding and to label errors.
        provider: Provider key used to label errors.

    Returns:
        ``{token_id: bias}``.

    Raises:
        InvalidTokenBias: a string encodes to zero or several tokens. Nothing
            is returned in that case, not even the entries that were valid.
    """
    if not tokens:
        return {}
    tok = tokenizer or get_tokenizer(model)
    out: Dict[int, Bias] = {}
    for token, bias in tokens.items():
        encoded = tok.encode(token)
        if len(encoded) != 1:
            raise InvalidTokenBias.for_token(token, bias, len(encoded), provider=provider, model=model)
        out[encoded[0]] = bias
    return out


__all__ = ["Tokenizer", "TiktokenTokenizer", "encoding_name", "get_tokenizer", "logit_bias_of_tokens"]
