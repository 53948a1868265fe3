"""Hugging Face Text Generation Inference adapter."""
from .client import HuggingfaceAiClient

__all__ = ["HuggingfaceAiClient"]
