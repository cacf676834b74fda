"""
Chat message DTO sent to the chat completion endpoint.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Chat prompts are rendered into an ordered list of these before the
request payload is built.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


# Message roles accepted by the chat endpoint.
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A rendered chat message.

    Attributes:
        role: The role of the message author.
        content: Rendered message text.
        name: Optional participant name; only meaningful for ``user`` messages.
    """

    role: Role
    content: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape; ``name`` is omitted when unset."""
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        return data


__all__ = [
    "Message",
    "Role",
]
