import asyncio

import pymupdf

from app.extraction.base import BaseDocumentExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import ExtractionResult, UploadedDocument


class PyMuPdfAdapter(BaseDocumentExtractor):
    """Extracts text locally from PDF using PyMuPDF, no OCR."""

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        return await asyncio.to_thread(self._extract, document.content)

    @staticmethod
    def _extract(pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return ExtractionResult(text="\n".join(pages).strip(), pages_count=len(pages))
