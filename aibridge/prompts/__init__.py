"""Versioned prompt registry and the prompt data shipped with the package."""
from .registry import PromptRecord, PromptRegistry

__all__ = ["PromptRecord", "PromptRegistry"]
