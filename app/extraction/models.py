from dataclasses import dataclass

DEFAULT_COMPONENT_NAME = "InvoiceComponent"


@dataclass(frozen=True)
class UploadedDocument:
    """A validated upload held in memory for the lifetime of one request."""

    content: bytes
    mime_type: str
    original_name: str
    size_bytes: int


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the extraction collaborator, consumed by every chain step.

    Document extractors fill ``text``. Image extractors fill ``markup`` and
    ``suggested_name`` with a draft component.
    """

    text: str = ""
    markup: str = ""
    suggested_name: str = ""
    pages_count: int = 1

    @property
    def source_text(self) -> str:
        return self.markup or self.text

    def is_empty(self) -> bool:
        return not self.source_text.strip()

    @property
    def component_name(self) -> str:
        return self.suggested_name or DEFAULT_COMPONENT_NAME
