"""Prompt layer: role-tagged messages, prompts and templates."""
from .messages import (
    Message,
    MessageType,
    assistant_message,
    function_message,
    system_message,
    user_message,
)
from .prompt import Prompt
from .template import (
    AssistantPromptTemplate,
    PromptTemplate,
    PromptTemplateError,
    SystemPromptTemplate,
)

__all__ = [
    "AssistantPromptTemplate",
    "Message",
    "MessageType",
    "Prompt",
    "PromptTemplate",
    "PromptTemplateError",
    "SystemPromptTemplate",
    "assistant_message",
    "function_message",
    "system_message",
    "user_message",
]
