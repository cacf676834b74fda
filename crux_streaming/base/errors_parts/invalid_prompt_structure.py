"""InvalidPromptStructure error (single-class module)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class InvalidPromptStructure(ProviderError):
    """A rendered chat prompt node is not a system, user, or assistant message.

    Attributes:
        tag: Name of the unrecognized node type.
    """

    tag: str = ""

    @classmethod
    def for_tag(cls, tag: str, *, provider: str = "openai", model: Optional[str] = None) -> "InvalidPromptStructure":
        return cls(
            code=ErrorCode.VALIDATION,
            message=(
                "Chat completion prompts must be SystemMessage, UserMessage, or "
                f"AssistantMessage, but this child was {tag}"
            ),
            provider=provider,
            model=model,
            tag=tag,
        )


__all__ = ["InvalidPromptStructure"]
