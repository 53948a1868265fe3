"""Google generative language (PaLM 2, v1beta3) chat and embedding adapters."""
from .api import GenerateMessageRequest, MessagePrompt, VertexAiApi, VertexMessage
from .chat import VertexAiChatClient
from .embedding import VertexAiEmbeddingClient

__all__ = [
    "GenerateMessageRequest",
    "MessagePrompt",
    "VertexAiApi",
    "VertexAiChatClient",
    "VertexAiEmbeddingClient",
    "VertexMessage",
]
