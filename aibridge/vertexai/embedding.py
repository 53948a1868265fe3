# aibridge/vertexai/embedding.py
from __future__ import annotations
import threading
from typing import List, Optional, Sequence

from aibridge.embedding.models import EmbeddingClient
from aibridge.vertexai.api import VertexAiApi


class VertexAiEmbeddingClient(EmbeddingClient):
    def __init__(self, api: VertexAiApi):
        self.api = api
        self._dimensions: Optional[int] = None
        self._lock = threading.Lock()

    def embed(self, text: str) -> List[float]:
        return self.api.embed_text(text)

    def embed_all(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []
        return self.api.batch_embed_text(list(texts))

    def dimensions(self) -> int:
        # probe once, the model's vector size does not change
        with self._lock:
            if self._dimensions is None:
                self._dimensions = super().dimensions()
            return self._dimensions
