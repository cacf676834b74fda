"""Provider-agnostic DTOs public surface.

Re-exports the one-class-per-file implementations under
``crux_streaming.base.models_parts``.
"""

from .models_parts.message import Message, Role

__all__ = ["Message", "Role"]
