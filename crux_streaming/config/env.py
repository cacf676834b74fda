"""crux_streaming.config.env
=========================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variable names holding their API keys (canonical first, then aliases).
- Small lookup helpers used by :func:`crux_streaming.config.get_provider_config`.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the caller decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
}

# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY", "OPENAI_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate; ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
