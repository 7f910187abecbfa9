from app.generation.client_base import BaseGenerationClient
from app.generation.factory import GenerationClientFactory
from app.generation.prompt_loader import load_prompt

__all__ = ["BaseGenerationClient", "GenerationClientFactory", "load_prompt"]
