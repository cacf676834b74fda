"""crux_streaming.config.defaults
=============================

Small, stable default values for the streaming adapters. They can be
overridden through environment variables or an external config file; these
are only the fallbacks.

Only plain constants live here to keep the module free of import cycles.
"""

from __future__ import annotations

# OpenAI endpoint and default models. Model ids are passed through unvalidated.
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
OPENAI_DEFAULT_COMPLETION_MODEL = "text-davinci-003"

# Operation name -> path relative to the base URL.
OPENAI_OPERATION_PATHS = {
    "createCompletion": "/completions",
    "createChatCompletion": "/chat/completions",
}

# Tokenizer used for logit bias when the model has no known encoding
# (the GPT-3 family BPE).
DEFAULT_BIAS_ENCODING = "r50k_base"


__all__ = [
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_CHAT_MODEL",
    "OPENAI_DEFAULT_COMPLETION_MODEL",
    "OPENAI_OPERATION_PATHS",
    "DEFAULT_BIAS_ENCODING",
]
