# aibridge/config.py
from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings

from aibridge.huggingface.client import DEFAULT_MAX_NEW_TOKENS
from aibridge.vertexai.api import DEFAULT_BASE_URL, DEFAULT_CHAT_MODEL, DEFAULT_EMBEDDING_MODEL


class ConfigurationError(RuntimeError):
    """Raised when settings are missing or inconsistent at wiring time."""
    pass


class AppSettings(BaseSettings):
    provider: str = "vertexai"  # vertexai | huggingface
    prompts_dir: Optional[str] = None
    audit_log: str = "runtime/audit.log.jsonl"
    log_level: str = "INFO"
    request_timeout: Optional[float] = 120.0

    class Config:
        env_prefix = "AIBRIDGE_"
        env_file = ".env"
        extra = "ignore"


class HuggingfaceSettings(BaseSettings):
    api_key: Optional[str] = None
    url: Optional[str] = None
    max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS

    class Config:
        env_prefix = "AIBRIDGE_HUGGINGFACE_"
        env_file = ".env"
        extra = "ignore"


class VertexAiConnectionSettings(BaseSettings):
    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None

    class Config:
        env_prefix = "AIBRIDGE_VERTEX_AI_"
        env_file = ".env"
        extra = "ignore"


class VertexAiChatSettings(BaseSettings):
    model: str = DEFAULT_CHAT_MODEL
    temperature: Optional[float] = 0.7
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    candidate_count: Optional[int] = 1

    class Config:
        env_prefix = "AIBRIDGE_VERTEX_AI_CHAT_"
        env_file = ".env"
        extra = "ignore"


class VertexAiEmbeddingSettings(BaseSettings):
    model: str = DEFAULT_EMBEDDING_MODEL

    class Config:
        env_prefix = "AIBRIDGE_VERTEX_AI_EMBEDDING_"
        env_file = ".env"
        extra = "ignore"
