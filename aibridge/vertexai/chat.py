# aibridge/vertexai/chat.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from aibridge.client.models import AiClient, AiResponse, Generation, split_conversation
from aibridge.prompt.prompt import Prompt
from aibridge.vertexai.api import GenerateMessageRequest, MessagePrompt, VertexAiApi, VertexMessage

log = logging.getLogger(__name__)


class VertexAiChatClient(AiClient):
    """
    Chat adapter for the generateMessage endpoint.

    System messages are joined into the prompt context; user and assistant
    messages become the turn list (author = role). Function messages have no
    counterpart in this API and are left out. Sampling settings are fixed at
    construction.
    """

    def __init__(
        self,
        api: VertexAiApi,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        candidate_count: Optional[int] = None,
    ):
        self.api = api
        self.temperature = temperature
        self.top_p = top_p
        self.top_k = top_k
        self.candidate_count = candidate_count

    def build_request(self, prompt: Prompt) -> GenerateMessageRequest:
        context, turns = split_conversation(prompt)
        messages = [VertexMessage(m.message_type.value, m.content) for m in turns]
        return GenerateMessageRequest(
            prompt=MessagePrompt(context, messages),
            temperature=self.temperature,
            candidate_count=self.candidate_count,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    def generate(self, prompt: Prompt) -> AiResponse:
        request = self.build_request(prompt)
        log.debug("vertexai chat: %d turn(s), context=%s", len(request.prompt.messages), bool(request.prompt.context))
        data = self.api.generate_message(request)
        generations = [self._to_generation(c) for c in data["candidates"]]
        provider_output: Dict[str, Any] = {}
        if data.get("filters"):
            provider_output["filters"] = data["filters"]
        log.debug("vertexai chat: %d candidate(s)", len(generations))
        return AiResponse(generations, provider_output)

    @staticmethod
    def _to_generation(candidate: Dict[str, Any]) -> Generation:
        props = {k: v for k, v in candidate.items() if k != "content"}
        return Generation(candidate.get("content", ""), props)
