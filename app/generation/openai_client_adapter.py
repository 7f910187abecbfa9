import httpx
import openai

from app.generation.client_base import BaseGenerationClient
from app.generation.exceptions import GenerationError, GenerationNetworkError


class OpenAIClientAdapter(BaseGenerationClient):
    """Generation client built on the OpenAI-compatible streaming chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        parts: list[str] = []
        try:
            stream = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                parts.append(chunk.choices[0].delta.content or "")
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not parts:
            raise GenerationError("AI returned empty response")
        return "".join(parts)

    async def aclose(self) -> None:
        await self._client.close()
