from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from app.extraction.models import ExtractionResult
from app.logging.logger import Log
from app.pipeline.exceptions import PipelineConfigurationError, PipelineExhaustedError
from app.pipeline.models import PipelineResult, StepOutcome


@dataclass(slots=True)
class PipelineContext:
    extraction: ExtractionResult
    outcomes: dict[str, StepOutcome] = field(default_factory=dict)

    def outcome_of(self, step_name: str) -> StepOutcome | None:
        return self.outcomes.get(step_name)

    def any_succeeded(self) -> bool:
        return any(outcome.succeeded for outcome in self.outcomes.values())


class PipelineStep(ABC):
    name: str
    terminal: ClassVar[bool] = False

    @abstractmethod
    async def run(self, context: PipelineContext) -> StepOutcome:
        raise NotImplementedError


Gate = Callable[[PipelineContext], bool]


def no_prior_success(context: PipelineContext) -> bool:
    """Default gate: run only while no earlier step has succeeded."""
    return not context.any_succeeded()


@dataclass(frozen=True)
class ChainLink:
    step: PipelineStep
    gate: Gate = no_prior_success


class FallbackChain:
    """Runs steps in a fixed order and returns the first successful artifact.

    A step failure (exception or timeout) is recorded as a failed StepOutcome
    and the chain moves on; it never aborts the run. The last link must be a
    step that cannot fail, so a run always produces exactly one artifact.
    """

    def __init__(self, name: str, links: Sequence[ChainLink]) -> None:
        if not links:
            raise PipelineConfigurationError(f"Chain '{name}' has no steps")
        if not links[-1].step.terminal:
            raise PipelineConfigurationError(
                f"Chain '{name}' must end with a terminal step, "
                f"got '{links[-1].step.name}'"
            )
        names = [link.step.name for link in links]
        if len(set(names)) != len(names):
            raise PipelineConfigurationError(f"Chain '{name}' has duplicate step names: {names}")
        self.name = name
        self._links = tuple(links)

    @property
    def step_names(self) -> list[str]:
        return [link.step.name for link in self._links]

    async def run(self, extraction: ExtractionResult) -> PipelineResult:
        context = PipelineContext(extraction=extraction)
        executed: list[StepOutcome] = []

        for link in self._links:
            step = link.step
            should_run = link.gate(context)
            Log.debug(f"Condition result for {step.name}: {should_run}")
            if not should_run:
                continue
            outcome = await self._run_step(step, context)
            context.outcomes[step.name] = outcome
            executed.append(outcome)

        winner = next((outcome for outcome in executed if outcome.succeeded), None)
        if winner is None:
            raise PipelineExhaustedError(
                f"Chain '{self.name}' produced no artifact; steps run: "
                f"{[outcome.step_name for outcome in executed]}"
            )
        Log.info(f"Chain {self.name}: using output from step {winner.step_name}")
        return PipelineResult(
            artifact=winner.artifact,
            provenance=winner.step_name,
            outcomes=tuple(executed),
        )

    @staticmethod
    async def _run_step(step: PipelineStep, context: PipelineContext) -> StepOutcome:
        Log.info(f"Executing step: {step.name}")
        try:
            return await step.run(context)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            Log.warning(f"Step {step.name}: Failed - {reason}")
            return StepOutcome.failure(step.name, reason)
