from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# ---------- Generate ----------
class MessageIn(BaseModel):
    role: str = "user"
    content: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class GenerateRequest(BaseModel):
    messages: List[MessageIn] = Field(default_factory=list)
    # alternative to messages: one template rendered into a single message
    template: Optional[str] = None
    variables: Dict[str, Any] = Field(default_factory=dict)
    role: str = "user"
    system: Optional[str] = None
    # alternative to messages and template: a registry prompt, rendered with `variables`
    prompt_id: Optional[str] = None
    agent: str = "default"
    version: str = "latest"


class GenerationOut(BaseModel):
    text: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class GenerateResponse(BaseModel):
    generations: List[GenerationOut] = Field(default_factory=list)
    provider_output: Dict[str, Any] = Field(default_factory=dict)


# ---------- Embed ----------
class EmbedRequest(BaseModel):
    texts: List[str]


class EmbedResponse(BaseModel):
    embeddings: List[List[float]] = Field(default_factory=list)
