"""Chain definitions for the two upload workflows.

Both workflows share one shape: generation steps tried in order, then a
terminal step that renders the extracted content as-is. A chain differs only
in its prompts, length limits, and terminal template.
"""

from dataclasses import dataclass

from app.generation.client_base import BaseGenerationClient
from app.generation.prompt_loader import load_prompt
from app.pipeline.pipeline import ChainLink, FallbackChain
from app.pipeline.steps import GenerationStep, TerminalStep


@dataclass(frozen=True)
class StepDefinition:
    name: str
    prompt_file: str
    min_output_chars: int
    max_input_chars: int | None = None


@dataclass(frozen=True)
class ChainDefinition:
    name: str
    system_prompt_file: str
    steps: tuple[StepDefinition, ...]
    terminal_name: str
    terminal_template: str
    terminal_empty_artifact: str
    terminal_max_input_chars: int | None = None

    def build(
        self,
        client: BaseGenerationClient,
        *,
        model: str,
        temperature: float,
        timeout_seconds: float | None,
    ) -> FallbackChain:
        system_prompt = load_prompt(self.system_prompt_file)
        links = [
            ChainLink(
                GenerationStep(
                    name=step.name,
                    client=client,
                    model=model,
                    prompt_template=load_prompt(step.prompt_file),
                    min_output_chars=step.min_output_chars,
                    max_input_chars=step.max_input_chars,
                    system_prompt=system_prompt,
                    temperature=temperature,
                    timeout_seconds=timeout_seconds,
                )
            )
            for step in self.steps
        ]
        links.append(
            ChainLink(
                TerminalStep(
                    name=self.terminal_name,
                    template=self.terminal_template,
                    empty_artifact=self.terminal_empty_artifact,
                    max_input_chars=self.terminal_max_input_chars,
                )
            )
        )
        return FallbackChain(self.name, links)


BLOG_CHAIN = ChainDefinition(
    name="pdf-to-blog",
    system_prompt_file="blog_system.txt",
    steps=(
        StepDefinition(
            name="generate-blog-post",
            prompt_file="blog_primary.txt",
            min_output_chars=50,
            max_input_chars=3000,
        ),
        StepDefinition(
            name="fallback-blog-post",
            prompt_file="blog_fallback.txt",
            min_output_chars=30,
            max_input_chars=1500,
        ),
    ),
    terminal_name="final-fallback",
    terminal_template="# Generated Content from PDF\n\n$text...",
    terminal_empty_artifact=(
        "# Error Processing Document\n\nUnable to process the document content."
    ),
    terminal_max_input_chars=2000,
)

REACT_CHAIN = ChainDefinition(
    name="invoice-to-react",
    system_prompt_file="react_system.txt",
    steps=(
        StepDefinition(
            name="enhance-component",
            prompt_file="react_refine.txt",
            min_output_chars=100,
        ),
        StepDefinition(
            name="fallback-component",
            prompt_file="react_simplify.txt",
            min_output_chars=50,
            max_input_chars=2000,
        ),
    ),
    terminal_name="final-fallback",
    terminal_template=(
        "// Original component generated from invoice image\n"
        "// Component Name: $component_name\n\n"
        "$text"
    ),
    terminal_empty_artifact=(
        "// Error: Unable to process invoice image\n"
        "export const InvoiceComponent = () => {\n"
        "  return <div>Error processing invoice</div>;\n"
        "};"
    ),
)
