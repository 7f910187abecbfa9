import asyncio
from collections.abc import Callable

from app.config.settings import Settings
from app.extraction.base import BaseDocumentExtractor
from app.extraction.exceptions import EmptyExtractionError, ExtractionNetworkError
from app.extraction.factory import ExtractorFactory
from app.extraction.models import ExtractionResult, UploadedDocument
from app.generation.client_base import BaseGenerationClient
from app.generation.factory import GenerationClientFactory
from app.logging.logger import Log
from app.pipeline.definitions import BLOG_CHAIN, REACT_CHAIN, ChainDefinition
from app.pipeline.models import ProcessingResult
from app.pipeline.pipeline import FallbackChain


class DocumentProcessor:
    """Orchestrates one upload: extract -> fallback chain.

    Extraction failures (including an empty transcript) abort the request;
    generation failures are absorbed by the chain.
    """

    def __init__(
        self,
        extractor: BaseDocumentExtractor,
        chain: FallbackChain,
        extraction_timeout_seconds: float | None = None,
        generation_client: BaseGenerationClient | None = None,
    ) -> None:
        self._extractor = extractor
        self._chain = chain
        self._extraction_timeout_seconds = extraction_timeout_seconds
        self._generation_client = generation_client

    @property
    def chain(self) -> FallbackChain:
        return self._chain

    async def aclose(self) -> None:
        """Close the extractor and the generation client the chain calls."""
        try:
            await self._extractor.aclose()
        finally:
            if self._generation_client is not None:
                await self._generation_client.aclose()

    async def process(self, document: UploadedDocument) -> ProcessingResult:
        """Run extraction and the fallback chain for a single upload."""
        Log.info(
            "Processing upload",
            file=document.original_name,
            bytes=document.size_bytes,
            mime=document.mime_type,
            chain=self._chain.name,
        )

        extraction = await self._extract(document)
        if extraction.is_empty():
            Log.error("Extraction returned no content", file=document.original_name)
            raise EmptyExtractionError("No content could be extracted from the provided document")
        Log.info(
            "Extraction finished",
            file=document.original_name,
            chars=len(extraction.source_text),
            pages=extraction.pages_count,
        )

        pipeline_result = await self._chain.run(extraction)
        return ProcessingResult(extraction=extraction, pipeline=pipeline_result)

    async def _extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            return await asyncio.wait_for(
                self._extractor.extract(document),
                timeout=self._extraction_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionNetworkError(
                f"Extraction timed out after {self._extraction_timeout_seconds}s"
            ) from exc


ExtractorBuilder = Callable[[Settings], BaseDocumentExtractor]


async def _build_processor(
    settings: Settings,
    create_extractor: ExtractorBuilder,
    definition: ChainDefinition,
    client: BaseGenerationClient | None,
) -> DocumentProcessor:
    """Wire one processor; on failure, close whatever was already built.

    The generation client is resolved first so a bad generation config never
    leaves an extractor with an open connection pool behind.
    """
    generation_client = client or GenerationClientFactory.create(settings)
    extractor: BaseDocumentExtractor | None = None
    try:
        extractor = create_extractor(settings)
        chain = definition.build(
            generation_client,
            model=settings.generation_model_name,
            temperature=settings.generation_temperature,
            timeout_seconds=settings.generation_timeout_seconds,
        )
    except Exception:
        if extractor is not None:
            await extractor.aclose()
        if client is None:
            await generation_client.aclose()
        raise
    return DocumentProcessor(
        extractor=extractor,
        chain=chain,
        extraction_timeout_seconds=settings.extraction_timeout_seconds,
        generation_client=generation_client,
    )


async def build_blog_processor(
    settings: Settings,
    client: BaseGenerationClient | None = None,
) -> DocumentProcessor:
    """PDF upload -> OCR transcript -> blog post chain."""
    return await _build_processor(
        settings, ExtractorFactory.create_document_extractor, BLOG_CHAIN, client
    )


async def build_react_processor(
    settings: Settings,
    client: BaseGenerationClient | None = None,
) -> DocumentProcessor:
    """Invoice image -> vision draft component -> refinement chain."""
    return await _build_processor(
        settings, ExtractorFactory.create_image_extractor, REACT_CHAIN, client
    )
