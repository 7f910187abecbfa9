import asyncio
import io

import pdfplumber

from app.extraction.base import BaseDocumentExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import ExtractionResult, UploadedDocument


class PdfPlumberAdapter(BaseDocumentExtractor):
    """Extracts text locally from PDF using pdfplumber, no OCR."""

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        return await asyncio.to_thread(self._extract, document.content)

    @staticmethod
    def _extract(pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return ExtractionResult(text="\n".join(pages).strip(), pages_count=len(pages))
