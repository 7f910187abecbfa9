import asyncio
from unittest.mock import AsyncMock

import pytest

from app.extraction.models import ExtractionResult
from app.pipeline.exceptions import PipelineConfigurationError, PipelineExhaustedError
from app.pipeline.models import StepOutcome
from app.pipeline.pipeline import ChainLink, FallbackChain, PipelineContext, no_prior_success
from app.pipeline.steps import GenerationStep, TerminalStep

SOURCE_TEXT = "Lorem ipsum dolor sit amet. " * 22


def _generation_step(name: str, client: AsyncMock, min_output_chars: int = 30) -> GenerationStep:
    return GenerationStep(
        name=name,
        client=client,
        model="m",
        prompt_template="Write about: $text",
        min_output_chars=min_output_chars,
        timeout_seconds=1,
    )


def _terminal_step() -> TerminalStep:
    return TerminalStep(
        name="final-fallback",
        template="# Raw\n\n$text",
        empty_artifact="# Nothing",
        max_input_chars=100,
    )


def _chain(primary: AsyncMock, fallback: AsyncMock) -> FallbackChain:
    return FallbackChain(
        "test-chain",
        [
            ChainLink(_generation_step("primary", primary, min_output_chars=50)),
            ChainLink(_generation_step("fallback", fallback, min_output_chars=30)),
            ChainLink(_terminal_step()),
        ],
    )


class FailingTerminal(TerminalStep):
    async def run(self, context: PipelineContext) -> StepOutcome:
        return StepOutcome.failure(self.name, "broken")


class TestFallbackChainSelection:
    @pytest.mark.asyncio
    async def test_primary_success_skips_later_steps(self) -> None:
        primary = AsyncMock()
        primary.generate.return_value = "p" * 80
        fallback = AsyncMock()

        result = await _chain(primary, fallback).run(ExtractionResult(text=SOURCE_TEXT))

        assert result.artifact == "p" * 80
        assert result.provenance == "primary"
        assert [o.step_name for o in result.outcomes] == ["primary"]
        fallback.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_primary_raises_fallback_wins(self) -> None:
        primary = AsyncMock()
        primary.generate.side_effect = RuntimeError("model unavailable")
        fallback = AsyncMock()
        fallback.generate.return_value = "f" * 40
        extraction = ExtractionResult(text=SOURCE_TEXT)
        assert len(extraction.text) == 616

        result = await _chain(primary, fallback).run(extraction)

        assert result.artifact == "f" * 40
        assert result.provenance == "fallback"
        first = result.outcomes[0]
        assert first.succeeded is False
        assert "model unavailable" in first.error

    @pytest.mark.asyncio
    async def test_primary_too_short_falls_through(self) -> None:
        primary = AsyncMock()
        primary.generate.return_value = "short"
        fallback = AsyncMock()
        fallback.generate.return_value = "f" * 40

        result = await _chain(primary, fallback).run(ExtractionResult(text=SOURCE_TEXT))

        assert result.provenance == "fallback"
        fallback.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_all_generation_fails_uses_terminal(self) -> None:
        primary = AsyncMock()
        primary.generate.side_effect = RuntimeError("down")
        fallback = AsyncMock()
        fallback.generate.return_value = "   "

        result = await _chain(primary, fallback).run(ExtractionResult(text=SOURCE_TEXT))

        assert result.provenance == "final-fallback"
        assert result.artifact == "# Raw\n\n" + SOURCE_TEXT[:100]
        assert result.outcomes[-1].succeeded is True
        assert [o.succeeded for o in result.outcomes] == [False, False, True]

    @pytest.mark.asyncio
    async def test_timeout_is_a_step_failure(self) -> None:
        async def hang(**_kwargs: object) -> str:
            await asyncio.sleep(10)
            return "never"

        primary = AsyncMock()
        primary.generate.side_effect = hang
        fallback = AsyncMock()
        fallback.generate.return_value = "f" * 40
        chain = FallbackChain(
            "timeouts",
            [
                ChainLink(
                    GenerationStep(
                        name="primary",
                        client=primary,
                        model="m",
                        prompt_template="$text",
                        min_output_chars=50,
                        timeout_seconds=0.01,
                    )
                ),
                ChainLink(_generation_step("fallback", fallback)),
                ChainLink(_terminal_step()),
            ],
        )

        result = await chain.run(ExtractionResult(text=SOURCE_TEXT))

        assert result.provenance == "fallback"
        assert result.outcomes[0].succeeded is False

    @pytest.mark.asyncio
    async def test_artifact_is_never_empty_for_non_empty_extraction(self) -> None:
        primary = AsyncMock()
        primary.generate.side_effect = Exception()
        fallback = AsyncMock()
        fallback.generate.side_effect = ValueError("bad")

        result = await _chain(primary, fallback).run(ExtractionResult(text="x"))

        assert result.artifact.strip()
        assert result.outcomes[0].error == "Exception"


class TestFallbackChainOrdering:
    @pytest.mark.asyncio
    async def test_steps_run_strictly_sequentially(self) -> None:
        events: list[str] = []

        def recorder(label: str, output: str):
            async def _generate(**_kwargs: object) -> str:
                events.append(f"start:{label}")
                await asyncio.sleep(0)
                events.append(f"end:{label}")
                return output

            return _generate

        primary = AsyncMock()
        primary.generate.side_effect = recorder("primary", "")
        fallback = AsyncMock()
        fallback.generate.side_effect = recorder("fallback", "f" * 40)

        await _chain(primary, fallback).run(ExtractionResult(text=SOURCE_TEXT))

        assert events == ["start:primary", "end:primary", "start:fallback", "end:fallback"]

    @pytest.mark.asyncio
    async def test_gates_see_outcomes_of_earlier_steps(self) -> None:
        seen: list[list[str]] = []

        def spy_gate(context: PipelineContext) -> bool:
            seen.append(sorted(context.outcomes))
            return no_prior_success(context)

        primary = AsyncMock()
        primary.generate.side_effect = RuntimeError("down")
        fallback = AsyncMock()
        fallback.generate.return_value = "f" * 40
        chain = FallbackChain(
            "gates",
            [
                ChainLink(_generation_step("primary", primary), gate=spy_gate),
                ChainLink(_generation_step("fallback", fallback), gate=spy_gate),
                ChainLink(_terminal_step(), gate=spy_gate),
            ],
        )

        result = await chain.run(ExtractionResult(text=SOURCE_TEXT))

        assert seen == [[], ["primary"], ["fallback", "primary"]]
        assert result.provenance == "fallback"


class TestFallbackChainConstruction:
    def test_rejects_empty_chain(self) -> None:
        with pytest.raises(PipelineConfigurationError, match="no steps"):
            FallbackChain("empty", [])

    def test_rejects_chain_without_terminal_step(self) -> None:
        step = _generation_step("primary", AsyncMock())
        with pytest.raises(PipelineConfigurationError, match="terminal step"):
            FallbackChain("open-ended", [ChainLink(step)])

    def test_rejects_duplicate_step_names(self) -> None:
        client = AsyncMock()
        with pytest.raises(PipelineConfigurationError, match="duplicate"):
            FallbackChain(
                "dupes",
                [
                    ChainLink(_generation_step("same", client)),
                    ChainLink(_generation_step("same", client)),
                    ChainLink(_terminal_step()),
                ],
            )

    def test_step_names_in_order(self) -> None:
        chain = _chain(AsyncMock(), AsyncMock())
        assert chain.step_names == ["primary", "fallback", "final-fallback"]

    @pytest.mark.asyncio
    async def test_broken_terminal_raises_exhausted(self) -> None:
        chain = FallbackChain(
            "broken",
            [ChainLink(FailingTerminal(name="final-fallback", template="$text", empty_artifact=""))],
        )
        with pytest.raises(PipelineExhaustedError, match="produced no artifact"):
            await chain.run(ExtractionResult(text="content"))


class TestPipelineContext:
    def test_outcome_of_returns_recorded_outcome(self) -> None:
        outcome = StepOutcome.failure("primary", "down")
        context = PipelineContext(extraction=ExtractionResult(text="x"), outcomes={"primary": outcome})

        assert context.outcome_of("primary") is outcome
        assert context.outcome_of("fallback") is None

    @pytest.mark.asyncio
    async def test_gate_can_require_a_specific_earlier_failure(self) -> None:
        def after_primary_failed(context: PipelineContext) -> bool:
            primary_outcome = context.outcome_of("primary")
            return primary_outcome is not None and not primary_outcome.succeeded

        primary = AsyncMock()
        primary.generate.return_value = "short"
        fallback = AsyncMock()
        fallback.generate.return_value = "f" * 40
        chain = FallbackChain(
            "targeted",
            [
                ChainLink(_generation_step("primary", primary, min_output_chars=50)),
                ChainLink(_generation_step("fallback", fallback), gate=after_primary_failed),
                ChainLink(_terminal_step()),
            ],
        )

        result = await chain.run(ExtractionResult(text=SOURCE_TEXT))

        assert result.provenance == "fallback"
        assert [o.step_name for o in result.outcomes] == ["primary", "fallback"]
