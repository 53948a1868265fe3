# aibridge/embedding/models.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence


@dataclass(frozen=True)
class Embedding:
    embedding: List[float]
    index: int


@dataclass
class EmbeddingResponse:
    data: List[Embedding]
    metadata: Dict[str, Any] = field(default_factory=dict)


class EmbeddingClient(ABC):
    @abstractmethod
    def embed(self, text: str) -> List[float]:
        raise NotImplementedError

    @abstractmethod
    def embed_all(self, texts: Sequence[str]) -> List[List[float]]:
        raise NotImplementedError

    def embed_for_response(self, texts: Sequence[str]) -> EmbeddingResponse:
        vectors = self.embed_all(texts)
        return EmbeddingResponse(data=[Embedding(v, i) for i, v in enumerate(vectors)])

    def dimensions(self) -> int:
        return len(self.embed("Hello World"))
