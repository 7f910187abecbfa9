import io
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.config.settings import Settings
from app.extraction.base import BaseDocumentExtractor
from app.extraction.models import ExtractionResult, UploadedDocument
from app.generation.client_base import BaseGenerationClient


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def example_settings() -> Settings:
    """Settings wired to the offline example adapters."""
    return Settings(
        _env_file=None,
        extraction_provider="example",
        vision_provider="example",
        generation_provider="example",
        generation_timeout_seconds=5,
        extraction_timeout_seconds=5,
    )


@pytest.fixture()
def pdf_document() -> UploadedDocument:
    return UploadedDocument(
        content=b"%PDF-fake",
        mime_type="application/pdf",
        original_name="report.pdf",
        size_bytes=9,
    )


@pytest.fixture()
def generation_client() -> AsyncMock:
    return AsyncMock(spec=BaseGenerationClient)


@pytest.fixture()
def make_extractor() -> Callable[[ExtractionResult], AsyncMock]:
    def _make(result: ExtractionResult) -> AsyncMock:
        extractor = AsyncMock(spec=BaseDocumentExtractor)
        extractor.extract.return_value = result
        return extractor

    return _make
