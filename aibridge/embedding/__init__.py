"""Embedding layer: vectors for text and the EmbeddingClient interface."""
from .models import Embedding, EmbeddingClient, EmbeddingResponse

__all__ = ["Embedding", "EmbeddingClient", "EmbeddingResponse"]
