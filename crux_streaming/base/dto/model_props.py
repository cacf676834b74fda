"""
Pydantic DTO for model invocation parameters.

Purpose
-------
Validates the sampling parameters shared by the completion and chat adapters
before any request is built, so out-of-range values fail at the call site
instead of as an upstream 400.

External dependencies: Pydantic only. Validation either succeeds or raises
``pydantic.ValidationError``.

Model ids are opaque strings; no compatibility checks are made between a model
and the endpoint it is sent to.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ModelProps(BaseModel):
    """Parameters for one model invocation.

    Attributes:
        model: Target model identifier (non-empty).
        max_tokens: If provided, must be positive.
        temperature: If provided, must be within [0.0, 2.0].
        stop: Stop sequence or list of stop sequences.
        logit_bias: Literal token string -> bias. Converted to token ids by
            the logit-bias encoder when the request is built.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    stop: Optional[Union[str, List[str]]] = None
    logit_bias: Optional[Dict[str, Union[int, float]]] = None

    def merged(self, **overrides: Any) -> "ModelProps":
        """Return a copy with non-``None`` ``overrides`` applied and re-validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ModelProps(**data)

    def sampling_params(self) -> Dict[str, Any]:
        """Request fields shared by both endpoints (``None`` values dropped)."""
        params = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stop": self.stop,
        }
        return {k: v for k, v in params.items() if v is not None}


__all__ = ["ModelProps"]
