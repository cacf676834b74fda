"""Model DTO parts (one class per module)."""

from .message import Message, Role

__all__ = ["Message", "Role"]
