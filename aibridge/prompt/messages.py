# aibridge/prompt/messages.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class MessageType(str, Enum):
    """Role of a message inside a conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    FUNCTION = "function"

    @classmethod
    def from_value(cls, value: str) -> "MessageType":
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Invalid MessageType value: {value!r}")


@dataclass(frozen=True)
class Message:
    """
    One role-tagged unit of text. `properties` carries provider-specific
    metadata and is exposed as a read-only mapping.
    """

    content: str
    message_type: MessageType = MessageType.USER
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.message_type, MessageType):
            object.__setattr__(self, "message_type", MessageType.from_value(self.message_type))
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


def user_message(content: str, **properties: Any) -> Message:
    return Message(content, MessageType.USER, properties)


def system_message(content: str, **properties: Any) -> Message:
    return Message(content, MessageType.SYSTEM, properties)


def assistant_message(content: str, **properties: Any) -> Message:
    return Message(content, MessageType.ASSISTANT, properties)


def function_message(content: str, name: Optional[str] = None, **properties: Any) -> Message:
    if name is not None:
        properties["name"] = name
    return Message(content, MessageType.FUNCTION, properties)
