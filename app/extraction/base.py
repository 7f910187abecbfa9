from abc import ABC, abstractmethod

from app.extraction.models import ExtractionResult, UploadedDocument


class BaseDocumentExtractor(ABC):
    """Contract for all extraction adapters (OCR, local PDF text, vision)."""

    @abstractmethod
    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        """Convert an uploaded document into text or draft markup.

        Args:
            document: Validated upload with raw bytes and MIME type.

        Returns:
            ExtractionResult; may be empty, the caller decides what that means.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """

    async def aclose(self) -> None:
        """Release network resources held by the adapter, if any."""
