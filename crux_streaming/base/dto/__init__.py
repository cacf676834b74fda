"""DTO validation package."""

from .model_props import ModelProps

__all__ = ["ModelProps"]
