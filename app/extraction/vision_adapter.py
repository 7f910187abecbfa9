import base64
import json

import httpx
import openai

from app.config.exceptions import ConfigurationError
from app.extraction.base import BaseDocumentExtractor
from app.extraction.exceptions import ExtractionError, ExtractionNetworkError
from app.extraction.models import DEFAULT_COMPONENT_NAME, ExtractionResult, UploadedDocument
from app.logging.logger import Log


class VisionComponentAdapter(BaseDocumentExtractor):
    """Drafts a React component from an invoice image with an OpenAI-compatible vision model."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        prompt: str,
        timeout_seconds: int,
        max_tokens: int = 4000,
        base_url: str | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("vision_api_key is not set")
        self._model = model
        self._prompt = prompt
        self._max_tokens = max_tokens
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        if not document.content:
            raise ExtractionError("Invalid image file: empty buffer")
        b64 = base64.b64encode(document.content).decode("utf-8")
        data_url = f"data:{document.mime_type};base64,{b64}"
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "image_url", "image_url": {"url": data_url}},
                            {"type": "text", "text": self._prompt},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"Vision provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"Vision provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("Vision model returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ExtractionError("Vision model returned empty response")

        markup, name = parse_component_reply(content)
        Log.info(f"Vision model drafted component {name} ({len(markup)} chars)")
        return ExtractionResult(markup=markup, suggested_name=name)

    async def aclose(self) -> None:
        await self._client.close()


def parse_component_reply(raw: str) -> tuple[str, str]:
    """Split a vision reply into (component code, component name).

    The model is asked for ``{"reactComponent": ..., "componentName": ...}``;
    anything that is not such an object is taken as the component code itself.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        return raw, DEFAULT_COMPONENT_NAME

    if not isinstance(parsed, dict):
        return raw, DEFAULT_COMPONENT_NAME
    component = parsed.get("reactComponent")
    if not isinstance(component, str) or not component:
        raise ExtractionError("No React component generated from the invoice image")
    name = parsed.get("componentName")
    if not isinstance(name, str) or not name:
        name = DEFAULT_COMPONENT_NAME
    return component, name
