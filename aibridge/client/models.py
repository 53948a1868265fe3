# aibridge/client/models.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from aibridge.prompt.messages import MessageType, user_message
from aibridge.prompt.prompt import Prompt


class InvalidPromptError(ValueError):
    """Raised before any network call when a prompt cannot be sent to a backend."""
    pass


@dataclass(frozen=True)
class Generation:
    """One candidate output plus backend metadata (token counts, finish reason, ...)."""

    text: str
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties or {})))

    @property
    def content(self) -> str:
        return self.text


class AiResponse:
    """Ordered generations returned for one prompt."""

    __slots__ = ("_generations", "_provider_output")

    def __init__(self, generations: Iterable[Generation], provider_output: Optional[Mapping[str, Any]] = None):
        self._generations: Tuple[Generation, ...] = tuple(generations)
        self._provider_output = MappingProxyType(dict(provider_output or {}))

    @property
    def generations(self) -> Tuple[Generation, ...]:
        return self._generations

    @property
    def generation(self) -> Optional[Generation]:
        return self._generations[0] if self._generations else None

    @property
    def provider_output(self) -> Mapping[str, Any]:
        return self._provider_output

    def __len__(self) -> int:
        return len(self._generations)

    def __repr__(self) -> str:
        return f"AiResponse(generations={list(self._generations)!r})"


class AiClient(ABC):
    """A backend that turns a Prompt into generations with one synchronous call."""

    @abstractmethod
    def generate(self, prompt: Prompt) -> AiResponse:
        raise NotImplementedError

    def generate_text(self, text: str) -> str:
        response = self.generate(Prompt(user_message(text)))
        gen = response.generation
        return gen.text if gen is not None else ""


def split_conversation(prompt: Prompt) -> Tuple[str, list]:
    """
    Separate system context from the conversational turns of a prompt.
    Returns (context, turns) where context joins system contents with newlines
    and turns keeps user/assistant messages in order.
    Raises InvalidPromptError if no user/assistant message remains.
    """
    context = "\n".join(m.content for m in prompt.messages if m.message_type is MessageType.SYSTEM)
    turns = [
        m for m in prompt.messages
        if m.message_type in (MessageType.USER, MessageType.ASSISTANT)
    ]
    if not turns:
        raise InvalidPromptError("No user or assistant messages found in the prompt!")
    return context, turns
