# aibridge/vertexai/api.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta3"
DEFAULT_CHAT_MODEL = "chat-bison-001"
DEFAULT_EMBEDDING_MODEL = "embedding-gecko-001"


# ---------- wire types ----------

@dataclass(frozen=True)
class VertexMessage:
    author: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"author": self.author, "content": self.content}


@dataclass(frozen=True)
class MessagePrompt:
    context: str
    messages: List[VertexMessage]
    examples: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"messages": [m.to_dict() for m in self.messages]}
        if self.context:
            out["context"] = self.context
        if self.examples:
            out["examples"] = self.examples
        return out


@dataclass(frozen=True)
class GenerateMessageRequest:
    prompt: MessagePrompt
    temperature: Optional[float] = None
    candidate_count: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"prompt": self.prompt.to_dict()}
        for key, value in (
            ("temperature", self.temperature),
            ("candidateCount", self.candidate_count),
            ("topP", self.top_p),
            ("topK", self.top_k),
        ):
            if value is not None:
                out[key] = value
        return out


# ---------- API ----------

class VertexAiApi:
    """
    Minimal client for the generative language v1beta3 REST API.

    The API key travels as the `key` query parameter. Every call is a single
    request; HTTP errors surface as requests.HTTPError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        chat_model: str = DEFAULT_CHAT_MODEL,
        embedding_model: str = DEFAULT_EMBEDDING_MODEL,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        if not api_key:
            raise ValueError("api_key is required for the generative language API")
        self.api_key = api_key
        self.chat_model = chat_model
        self.embedding_model = embedding_model
        self.timeout = timeout
        self.sess = session or requests.Session()
        self.sess.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    # ---- transport ----
    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        log.debug("vertexai POST %s", path)
        r = self.sess.post(self._url(path), params={"key": self.api_key}, json=body, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        log.debug("vertexai GET %s", path)
        r = self.sess.get(self._url(path), params={"key": self.api_key, **(params or {})}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # ---- chat ----
    def generate_message(self, request: GenerateMessageRequest) -> Dict[str, Any]:
        """Returns the raw response: {"candidates": [...], "messages": [...], "filters": [...]}."""
        return self._post(f"models/{self.chat_model}:generateMessage", request.to_dict())

    def count_message_tokens(self, prompt: MessagePrompt) -> int:
        data = self._post(f"models/{self.chat_model}:countMessageTokens", {"prompt": prompt.to_dict()})
        return int(data["tokenCount"])

    # ---- embeddings ----
    def embed_text(self, text: str) -> List[float]:
        data = self._post(f"models/{self.embedding_model}:embedText", {"text": text})
        return [float(x) for x in data["embedding"]["value"]]

    def batch_embed_text(self, texts: List[str]) -> List[List[float]]:
        data = self._post(f"models/{self.embedding_model}:batchEmbedText", {"texts": list(texts)})
        return [[float(x) for x in item["value"]] for item in data["embeddings"]]

    # ---- models ----
    def get_model(self, name: str) -> Dict[str, Any]:
        name = name[len("models/"):] if name.startswith("models/") else name
        return self._get(f"models/{name}")

    def list_models(self) -> List[str]:
        names: List[str] = []
        page_token: Optional[str] = None
        while True:
            params = {"pageToken": page_token} if page_token else {}
            data = self._get("models", params)
            names.extend(m["name"] for m in data.get("models", []))
            page_token = data.get("nextPageToken")
            if not page_token:
                return names
