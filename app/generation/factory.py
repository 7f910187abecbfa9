from typing import ClassVar

from app.config.exceptions import ConfigurationError
from app.config.settings import Settings
from app.generation.client_base import BaseGenerationClient
from app.generation.example_client_adapter import ExampleClientAdapter
from app.generation.openai_client_adapter import OpenAIClientAdapter


class GenerationClientFactory:
    """Creates the configured generation client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "mistral": "https://api.mistral.ai/v1",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        """Create a configured generation client from application settings."""
        provider = settings.generation_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.generation_api_key
        if not api_key:
            if provider not in cls.KEYLESS_PROVIDERS:
                raise ConfigurationError(
                    f"generation_api_key is required for generation_provider={provider}"
                )
            api_key = provider
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.generation_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.generation_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ConfigurationError(
                    "generation_base_url is required for "
                    "generation_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigurationError(
            f"Unknown generation provider '{provider}'. Choose from: {supported}"
        )
