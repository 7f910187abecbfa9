"""Example generation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerationClient and register the provider in GenerationClientFactory.
"""

from typing import ClassVar

from app.generation.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Example adapter that returns fixed markdown.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[str] = (
        "# Example Post\n\n"
        "This post was produced by the example generation client. Configure a "
        "real provider to turn extracted documents into readable articles."
    )

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return self.DEFAULT_RESPONSE
