# server/app.py
from __future__ import annotations
from typing import List

import requests
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from aibridge.client.models import AiClient, InvalidPromptError
from aibridge.config import ConfigurationError
from aibridge.embedding.models import EmbeddingClient
from aibridge.prompt.messages import Message, MessageType, system_message
from aibridge.prompt.prompt import Prompt
from aibridge.prompt.template import PromptTemplate, PromptTemplateError
from aibridge.prompts.registry import PromptRegistry
from aibridge.runner import PromptRunner
from aibridge.wiring import get_ai_client, get_embedding_client, get_prompt_registry
from server.schemas import (
    EmbedRequest,
    EmbedResponse,
    GenerateRequest,
    GenerateResponse,
    GenerationOut,
)

# ---------- App ----------
app = FastAPI(title="aibridge API")


def _safe_err(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


@app.exception_handler(ConfigurationError)
def configuration_error(request: Request, e: ConfigurationError):
    # raised while resolving client dependencies, before any handler runs
    return JSONResponse(status_code=500, content={"detail": _safe_err(e)})


# ---------- prompt assembly ----------
def build_prompt(req: GenerateRequest) -> Prompt:
    messages: List[Message] = []
    if req.system:
        messages.append(system_message(req.system))
    if req.template is not None:
        tmpl = PromptTemplate(req.template, message_type=MessageType.from_value(req.role))
        messages.append(tmpl.create_message(req.variables))
    for m in req.messages:
        messages.append(Message(m.content, MessageType.from_value(m.role), m.properties))
    if not messages:
        raise InvalidPromptError("Request contains neither messages nor a template")
    return Prompt(messages)


# ---------- health ----------
@app.get("/health")
def health():
    return {"ok": True}


# ---------- generate ----------
@app.post("/generate", response_model=GenerateResponse)
def generate(
    req: GenerateRequest,
    client: AiClient = Depends(get_ai_client),
    registry: PromptRegistry = Depends(get_prompt_registry),
):
    if req.prompt_id is not None:
        try:
            registry.get_prompt(req.prompt_id, req.version)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=_safe_err(e))
    try:
        if req.prompt_id is not None:
            response = PromptRunner(registry, client).generate(
                prompt_id=req.prompt_id, inputs=req.variables, agent=req.agent, version=req.version
            )
        else:
            response = client.generate(build_prompt(req))
    except (requests.RequestException, KeyError) as e:
        # KeyError: the backend answered without an expected field
        raise HTTPException(status_code=502, detail=_safe_err(e))
    except (PromptTemplateError, ValueError) as e:
        # InvalidPromptError and unknown roles are ValueErrors too
        raise HTTPException(status_code=422, detail=_safe_err(e))
    return GenerateResponse(
        generations=[GenerationOut(text=g.text, properties=dict(g.properties)) for g in response.generations],
        provider_output=dict(response.provider_output),
    )


# ---------- embed ----------
@app.post("/embed", response_model=EmbedResponse)
def embed(req: EmbedRequest, client: EmbeddingClient = Depends(get_embedding_client)):
    try:
        vectors = client.embed_all(req.texts)
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=_safe_err(e))
    return EmbedResponse(embeddings=vectors)
