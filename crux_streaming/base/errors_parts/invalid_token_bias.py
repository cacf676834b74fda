"""InvalidTokenBias error (single-class module).

Raised by the logit-bias encoder before any request is sent when a requested
bias token does not encode to exactly one provider token.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class InvalidTokenBias(ProviderError):
    """A logit-bias key that does not map to exactly one token.

    Attributes:
        token: The literal string the caller tried to bias.
        bias: The bias value that was requested for ``token``.
        token_count: Number of tokens ``token`` encoded to.
    """

    token: str = ""
    bias: Union[int, float] = 0
    token_count: int = 0

    @classmethod
    def for_token(
        cls,
        token: str,
        bias: Union[int, float],
        token_count: int,
        *,
        provider: str = "openai",
        model: Optional[str] = None,
    ) -> "InvalidTokenBias":
        return cls(
            code=ErrorCode.VALIDATION,
            message=(
                f"You can only set logit_bias for a single token, but {token!r} "
                f"(bias {bias}) is {token_count} tokens."
            ),
            provider=provider,
            model=model,
            token=token,
            bias=bias,
            token_count=token_count,
        )


__all__ = ["InvalidTokenBias"]
