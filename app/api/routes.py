from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.dependencies import BLOG, REACT, ProcessorRegistry, get_registry, get_settings
from app.api.exceptions import ProcessingFailedError
from app.api.responses import build_blog_envelope, build_component_envelope
from app.api.upload import read_upload
from app.config.exceptions import ConfigurationError
from app.config.settings import Settings
from app.extraction.models import UploadedDocument
from app.logging.logger import Log
from app.pipeline.models import ProcessingResult

router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {
        "status": "ok",
        "message": f"{settings.app_name} is running",
        "version": settings.app_version,
    }


@router.post("/api/upload-pdf")
async def upload_pdf(
    pdf: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    registry: ProcessorRegistry = Depends(get_registry),
) -> dict[str, Any]:
    document = await read_upload(
        pdf,
        field="pdf",
        label="PDF",
        mime_prefix="application/pdf",
        max_bytes=settings.max_upload_bytes,
    )
    Log.info("Received PDF, starting workflow...", file=document.original_name)
    result = await _process(registry, BLOG, document, label="PDF")
    return build_blog_envelope(
        document,
        result,
        service_name=settings.app_name,
        model=settings.blog_response_model,
    )


@router.post("/api/upload-invoice")
async def upload_invoice(
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    registry: ProcessorRegistry = Depends(get_registry),
) -> dict[str, Any]:
    document = await read_upload(
        image,
        field="image",
        label="image",
        mime_prefix="image/",
        max_bytes=settings.max_upload_bytes,
    )
    Log.info("Received invoice image, starting workflow...", file=document.original_name)
    result = await _process(registry, REACT, document, label="invoice image")
    return build_component_envelope(
        document,
        result,
        service_name=settings.app_name,
        model=settings.component_response_model,
    )


async def _process(
    registry: ProcessorRegistry,
    kind: str,
    document: UploadedDocument,
    *,
    label: str,
) -> ProcessingResult:
    try:
        processor = await registry.get(kind)
        result = await processor.process(document)
    except ConfigurationError as exc:
        Log.error("Workflow is not configured", workflow=kind, reason=exc)
        raise ProcessingFailedError(
            "Service is not configured to process this request"
        ) from exc
    except Exception as exc:
        Log.exception(f"Error processing {label} {document.original_name}: {exc}")
        raise ProcessingFailedError(f"Error processing {label}: {exc}") from exc
    Log.info("Workflow finished", workflow=kind, provenance=result.pipeline.provenance)
    return result
