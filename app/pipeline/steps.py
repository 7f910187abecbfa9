import asyncio
from string import Template
from typing import ClassVar

from app.extraction.models import ExtractionResult
from app.generation.client_base import BaseGenerationClient
from app.logging.logger import Log
from app.pipeline.models import StepOutcome
from app.pipeline.pipeline import PipelineContext, PipelineStep


def render(template: str, extraction: ExtractionResult, max_input_chars: int | None) -> str:
    """Fill ``$text`` and ``$component_name`` placeholders from the extraction."""
    text = extraction.source_text
    if max_input_chars is not None:
        text = text[:max_input_chars]
    return Template(template).safe_substitute(
        text=text,
        component_name=extraction.component_name,
    )


class GenerationStep(PipelineStep):
    """One model call; succeeds when the stripped output exceeds ``min_output_chars``."""

    def __init__(
        self,
        *,
        name: str,
        client: BaseGenerationClient,
        model: str,
        prompt_template: str,
        min_output_chars: int,
        max_input_chars: int | None = None,
        system_prompt: str = "",
        temperature: float = 0.7,
        timeout_seconds: float | None = None,
    ) -> None:
        self.name = name
        self._client = client
        self._model = model
        self._prompt_template = prompt_template
        self._min_output_chars = min_output_chars
        self._max_input_chars = max_input_chars
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds

    async def run(self, context: PipelineContext) -> StepOutcome:
        if context.extraction.is_empty():
            return StepOutcome.failure(self.name, "Missing extracted content")

        prompt = render(self._prompt_template, context.extraction, self._max_input_chars)
        Log.debug(f"Step {self.name} prompt:\n{prompt}")
        output = await asyncio.wait_for(
            self._client.generate(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            ),
            timeout=self._timeout_seconds,
        )

        if len(output.strip()) > self._min_output_chars:
            Log.info(f"Step {self.name}: Succeeded - Generated {len(output)} characters")
            return StepOutcome(step_name=self.name, artifact=output, succeeded=True)
        Log.warning(f"Step {self.name}: Failed - Generated content too short")
        return StepOutcome.failure(
            self.name,
            f"output of {len(output.strip())} chars is not above {self._min_output_chars}",
        )


class TerminalStep(PipelineStep):
    """Renders the raw extracted content without a model call. Always succeeds."""

    terminal: ClassVar[bool] = True

    def __init__(
        self,
        *,
        name: str,
        template: str,
        empty_artifact: str,
        max_input_chars: int | None = None,
    ) -> None:
        self.name = name
        self._template = template
        self._empty_artifact = empty_artifact
        self._max_input_chars = max_input_chars

    async def run(self, context: PipelineContext) -> StepOutcome:
        if context.extraction.is_empty():
            Log.error(f"Step {self.name}: no extracted content, returning placeholder")
            artifact = self._empty_artifact
        else:
            artifact = render(self._template, context.extraction, self._max_input_chars)
            Log.info(f"Step {self.name}: Succeeded - Rendered raw extracted content")
        return StepOutcome(step_name=self.name, artifact=artifact, succeeded=True)
