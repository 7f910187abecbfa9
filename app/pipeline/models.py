from dataclasses import dataclass

from app.extraction.models import ExtractionResult


@dataclass(frozen=True)
class StepOutcome:
    """Result of one chain step invocation.

    ``succeeded`` is only true when ``artifact`` is usable; a failed outcome
    carries the reason in ``error`` for logging.
    """

    step_name: str
    artifact: str
    succeeded: bool
    error: str = ""

    @classmethod
    def failure(cls, step_name: str, error: str) -> "StepOutcome":
        return cls(step_name=step_name, artifact="", succeeded=False, error=error)


@dataclass(frozen=True)
class PipelineResult:
    """The winning artifact and the name of the step that produced it."""

    artifact: str
    provenance: str
    outcomes: tuple[StepOutcome, ...] = ()


@dataclass(frozen=True)
class ProcessingResult:
    extraction: ExtractionResult
    pipeline: PipelineResult
