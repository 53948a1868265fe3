# aibridge/wiring.py
from __future__ import annotations
from functools import lru_cache
from typing import Optional

from aibridge.client.models import AiClient
from aibridge.config import (
    AppSettings,
    ConfigurationError,
    HuggingfaceSettings,
    VertexAiChatSettings,
    VertexAiConnectionSettings,
    VertexAiEmbeddingSettings,
)
from aibridge.embedding.models import EmbeddingClient
from aibridge.huggingface.client import HuggingfaceAiClient
from aibridge.prompts.registry import PromptRegistry
from aibridge.vertexai.api import VertexAiApi
from aibridge.vertexai.chat import VertexAiChatClient
from aibridge.vertexai.embedding import VertexAiEmbeddingClient

"""
Builds clients from settings. Each builder takes explicit settings objects so
callers and tests can wire by hand; the cached get_* functions read the
environment once and hand out the same instances afterwards (FastAPI
dependencies use these).
"""

PROVIDERS = ("vertexai", "huggingface")


# ---------- builders ----------

def build_vertex_ai_api(
    connection: VertexAiConnectionSettings,
    chat: VertexAiChatSettings,
    embedding: VertexAiEmbeddingSettings,
    timeout: Optional[float] = None,
) -> VertexAiApi:
    if not connection.api_key:
        raise ConfigurationError("AIBRIDGE_VERTEX_AI_API_KEY is not set")
    return VertexAiApi(
        connection.base_url,
        connection.api_key,
        chat.model,
        embedding.model,
        timeout=timeout,
    )


def build_vertex_ai_chat_client(api: VertexAiApi, chat: VertexAiChatSettings) -> VertexAiChatClient:
    return VertexAiChatClient(
        api,
        temperature=chat.temperature,
        top_p=chat.top_p,
        top_k=chat.top_k,
        candidate_count=chat.candidate_count,
    )


def build_huggingface_client(settings: HuggingfaceSettings, timeout: Optional[float] = None) -> HuggingfaceAiClient:
    if not settings.api_key:
        raise ConfigurationError("AIBRIDGE_HUGGINGFACE_API_KEY is not set")
    if not settings.url:
        raise ConfigurationError("AIBRIDGE_HUGGINGFACE_URL is not set")
    return HuggingfaceAiClient(
        settings.api_key,
        settings.url,
        max_new_tokens=settings.max_new_tokens,
        timeout=timeout,
    )


# ---------- cached singletons ----------

@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache(maxsize=1)
def get_vertex_ai_api() -> VertexAiApi:
    return build_vertex_ai_api(
        VertexAiConnectionSettings(),
        VertexAiChatSettings(),
        VertexAiEmbeddingSettings(),
        timeout=get_app_settings().request_timeout,
    )


@lru_cache(maxsize=1)
def get_ai_client() -> AiClient:
    app = get_app_settings()
    provider = app.provider.strip().lower()
    if provider == "vertexai":
        return build_vertex_ai_chat_client(get_vertex_ai_api(), VertexAiChatSettings())
    if provider == "huggingface":
        return build_huggingface_client(HuggingfaceSettings(), timeout=app.request_timeout)
    raise ConfigurationError(f"Unknown provider {app.provider!r}; expected one of {', '.join(PROVIDERS)}")


@lru_cache(maxsize=1)
def get_embedding_client() -> EmbeddingClient:
    return VertexAiEmbeddingClient(get_vertex_ai_api())


@lru_cache(maxsize=1)
def get_prompt_registry() -> PromptRegistry:
    return PromptRegistry(get_app_settings().prompts_dir)


def reset() -> None:
    """Drop cached settings and clients so the next call re-reads the environment."""
    for fn in (get_app_settings, get_vertex_ai_api, get_ai_client, get_embedding_client, get_prompt_registry):
        fn.cache_clear()
