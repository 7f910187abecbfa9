from app.config.exceptions import ConfigurationError
from app.config.settings import Settings
from app.extraction.base import BaseDocumentExtractor
from app.extraction.example_adapter import ExampleExtractorAdapter
from app.extraction.mistral_ocr_adapter import MistralOcrAdapter
from app.extraction.pdfplumber_adapter import PdfPlumberAdapter
from app.extraction.pymupdf_adapter import PyMuPdfAdapter
from app.extraction.vision_adapter import VisionComponentAdapter
from app.generation.prompt_loader import load_prompt


class ExtractorFactory:
    """Creates the extraction adapters selected in settings."""

    LOCAL_PDF_ADAPTERS: dict[str, type[BaseDocumentExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_document_extractor(cls, settings: Settings) -> BaseDocumentExtractor:
        """Extractor for PDF uploads (text transcript)."""
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return ExampleExtractorAdapter()
        if provider == "mistral":
            return MistralOcrAdapter(
                api_key=settings.mistral_api_key,
                base_url=settings.mistral_base_url,
                model=settings.mistral_ocr_model,
                timeout_seconds=settings.extraction_timeout_seconds,
            )
        adapter_cls = cls.LOCAL_PDF_ADAPTERS.get(provider)
        if adapter_cls is None:
            supported = ["example", "mistral", *cls.LOCAL_PDF_ADAPTERS]
            raise ConfigurationError(
                f"Unknown extraction provider '{provider}'. Choose from: {supported}"
            )
        return adapter_cls()

    @classmethod
    def create_image_extractor(cls, settings: Settings) -> BaseDocumentExtractor:
        """Extractor for invoice image uploads (draft component markup)."""
        provider = settings.vision_provider.lower()
        if provider == "example":
            return ExampleExtractorAdapter()
        if provider not in ("openai", "openai_compatible"):
            raise ConfigurationError(
                f"Unknown vision provider '{provider}'. "
                "Choose from: ['example', 'openai', 'openai_compatible']"
            )
        base_url = settings.vision_base_url.strip() or None
        if provider == "openai_compatible" and base_url is None:
            raise ConfigurationError(
                "vision_base_url is required for vision_provider=openai_compatible"
            )
        return VisionComponentAdapter(
            api_key=settings.vision_api_key,
            model=settings.vision_model_name,
            prompt=load_prompt("invoice_vision.txt"),
            timeout_seconds=settings.vision_timeout_seconds,
            max_tokens=settings.vision_max_tokens,
            base_url=base_url,
        )
