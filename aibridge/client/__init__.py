"""Client layer: uniform response shape and the AiClient interface."""
from .models import AiClient, AiResponse, Generation, InvalidPromptError

__all__ = ["AiClient", "AiResponse", "Generation", "InvalidPromptError"]
