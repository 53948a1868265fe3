# aibridge/huggingface/client.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import requests

from aibridge.client.models import AiClient, AiResponse, Generation
from aibridge.prompt.prompt import Prompt

"""
Client for a Hugging Face Inference Endpoint running Text Generation Inference.

The endpoint URL is the full inference URL; the whole prompt is sent as one
"inputs" string. Every returned item becomes a Generation whose properties are
the item's "details" object (generated_tokens, finish_reason, seed, ...).
"""

log = logging.getLogger(__name__)

DEFAULT_MAX_NEW_TOKENS = 1000


class HuggingfaceAiClient(AiClient):
    def __init__(
        self,
        api_token: str,
        base_url: str,
        *,
        max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
        details: bool = True,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url must be set to the inference endpoint URL")
        self.base_url = base_url
        self.max_new_tokens = max_new_tokens
        self.details = details
        self.timeout = timeout
        self.sess = session or requests.Session()
        self.sess.headers.update({
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def _request_body(self, prompt: Prompt) -> Dict[str, Any]:
        return {
            "inputs": prompt.contents,
            "parameters": {
                "max_new_tokens": self.max_new_tokens,
                "details": self.details,
            },
        }

    def generate(self, prompt: Prompt) -> AiResponse:
        body = self._request_body(prompt)
        log.debug("huggingface generate: url=%s messages=%d", self.base_url, len(prompt))
        r = self.sess.post(self.base_url, json=body, timeout=self.timeout)
        r.raise_for_status()
        data = r.json()
        # TGI answers with a list; some endpoints return a bare object
        items: List[Dict[str, Any]] = data if isinstance(data, list) else [data]
        generations = [
            Generation(item["generated_text"], item.get("details") or {})
            for item in items
        ]
        log.debug("huggingface generate: %d generation(s)", len(generations))
        return AiResponse(generations)
