# aibridge/prompt/prompt.py
from __future__ import annotations
from typing import Iterable, Iterator, Tuple, Union

from aibridge.prompt.messages import Message, MessageType

PromptInput = Union[str, Message, Iterable[Message]]


class Prompt:
    """Ordered, read-only sequence of messages handed to an AiClient."""

    __slots__ = ("_messages",)

    def __init__(self, messages: PromptInput):
        if isinstance(messages, str):
            items: Tuple[Message, ...] = (Message(messages, MessageType.USER),)
        elif isinstance(messages, Message):
            items = (messages,)
        else:
            items = tuple(messages)
            for m in items:
                if not isinstance(m, Message):
                    raise TypeError(f"Prompt accepts Message instances, got {type(m).__name__}")
        self._messages = items

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._messages

    @property
    def contents(self) -> str:
        # Single-string backends receive all message texts back to back.
        return "".join(m.content for m in self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Prompt):
            return NotImplemented
        return self._messages == other._messages

    def __repr__(self) -> str:
        return f"Prompt(messages={list(self._messages)!r})"
