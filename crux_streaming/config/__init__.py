"""Unified configuration layer for the streaming adapters.

Goals
-----
* Centralize defaults (models, base URL).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_CHAT_MODEL, OPENAI_BASE_URL)
    4. API key from the provider's key variables (``config.env``)
    5. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider: str)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_BASE_URL, <PROVIDER>_MODEL, <PROVIDER>_CHAT_MODEL,
<PROVIDER>_COMPLETION_MODEL, <PROVIDER>_ORGANIZATION.
``<PROVIDER>_MODEL`` is a shorthand that sets the chat model. API keys are
read from the variables listed in ``config.env`` (``OPENAI_API_KEY`` first),
skipping placeholder values.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, JSON is attempted first, then YAML:

```
openai:
  chat_model: gpt-4
  completion_model: text-davinci-003
  base_url: https://api.openai.com/v1
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .env import is_placeholder, resolve_provider_key
from .defaults import (
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_CHAT_MODEL,
    OPENAI_DEFAULT_COMPLETION_MODEL,
)


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "chat_model": OPENAI_DEFAULT_CHAT_MODEL,
        "completion_model": OPENAI_DEFAULT_COMPLETION_MODEL,
    },
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "chat_model": "CHAT_MODEL",
    "completion_model": "COMPLETION_MODEL",
    "base_url": "BASE_URL",
    "organization": "ORGANIZATION",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables are only overridden when their current value looks
    like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    # Shorthand: <PROVIDER>_MODEL selects the chat model unless CHAT_MODEL is set.
    if "model" in out:
        out.setdefault("chat_model", out.pop("model"))
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> key
    lookup -> overrides. ``None`` override values are ignored.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def reset_config_cache() -> None:
    """Forget the cached external config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_provider_config",
    "reset_config_cache",
    "DEFAULTS",
]
