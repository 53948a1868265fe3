# aibridge/runner.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from aibridge.client.models import AiClient, AiResponse
from aibridge.observability import audit_log, new_run_id
from aibridge.prompt.messages import Message, MessageType
from aibridge.prompt.prompt import Prompt
from aibridge.prompts.registry import PromptRegistry

log = logging.getLogger(__name__)


def build_registry_prompt(
    registry: PromptRegistry,
    prompt_id: str,
    inputs: Optional[Dict[str, Any]] = None,
    agent: str = "default",
    version: str = "latest",
) -> Prompt:
    """System persona for `agent` (when non-empty) followed by the rendered registry prompt."""
    message = registry.get_template(prompt_id, version).create_message(inputs or {})
    system_text = registry.get_system_message(agent)
    messages = []
    if system_text:
        messages.append(Message(system_text, MessageType.SYSTEM))
    messages.append(message)
    return Prompt(messages)


class PromptRunner:
    """
    Renders a registry prompt with inputs, puts the agent's system persona in
    front of it and sends the result to an AiClient.

    Usage:
        runner = PromptRunner(PromptRegistry(), client)
        response = runner.generate(
            prompt_id="summary",
            inputs={"text": "...", "max_sentences": 3},
            agent="summarizer",
        )
    """

    def __init__(self, registry: PromptRegistry, client: AiClient):
        self.registry = registry
        self.client = client

    def build_prompt(
        self,
        prompt_id: str,
        inputs: Optional[Dict[str, Any]] = None,
        agent: str = "default",
        version: str = "latest",
    ) -> Prompt:
        return build_registry_prompt(self.registry, prompt_id, inputs, agent, version)

    def generate(
        self,
        *,
        prompt_id: str,
        inputs: Optional[Dict[str, Any]] = None,
        agent: str = "default",
        version: str = "latest",
        run_id: Optional[str] = None,
    ) -> AiResponse:
        run_id = run_id or new_run_id()
        params = {"prompt_id": prompt_id, "version": version, "agent": agent, "client": type(self.client).__name__}
        audit_log(run_id=run_id, action="generate", status="start", params=params)
        try:
            prompt = self.build_prompt(prompt_id, inputs, agent, version)
            response = self.client.generate(prompt)
        except Exception as e:
            log.warning("run %s: %s failed: %s", run_id, prompt_id, e)
            audit_log(run_id=run_id, action="generate", status="error", params=params,
                      message=f"{type(e).__name__}: {e}")
            raise
        audit_log(run_id=run_id, action="generate", status="ok", params=params,
                  extra={"generations": len(response.generations)})
        return response
