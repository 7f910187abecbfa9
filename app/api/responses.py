"""Response envelopes for the upload endpoints.

Page dimensions are not measured from the document: they are fixed US
Letter values kept for client compatibility and flagged ``placeholder``.
"""

from datetime import datetime, timezone
from typing import Any

from app.extraction.models import UploadedDocument
from app.pipeline.models import ProcessingResult

PLACEHOLDER_DIMENSIONS: dict[str, Any] = {
    "dpi": 300,
    "height": 792,
    "width": 612,
    "placeholder": True,
}


def _timestamp(generated_at: datetime | None) -> str:
    return (generated_at or datetime.now(timezone.utc)).isoformat()


def build_blog_envelope(
    document: UploadedDocument,
    result: ProcessingResult,
    *,
    service_name: str,
    model: str,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    provenance = result.pipeline.provenance
    return {
        "pages": [
            {
                "index": 0,
                "markdown": result.pipeline.artifact,
                "images": [],
                "dimensions": dict(PLACEHOLDER_DIMENSIONS),
                "metadata": {
                    "source": document.original_name,
                    "generatedAt": _timestamp(generated_at),
                    "generator": f"{service_name} - {provenance}",
                    "provenance": provenance,
                },
            }
        ],
        "model": model,
        "usage_info": {
            "pages_processed": result.extraction.pages_count,
            "doc_size_bytes": document.size_bytes,
        },
    }


def build_component_envelope(
    document: UploadedDocument,
    result: ProcessingResult,
    *,
    service_name: str,
    model: str,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    provenance = result.pipeline.provenance
    return {
        "component": {
            "name": result.extraction.component_name,
            "code": result.pipeline.artifact,
            "metadata": {
                "source": document.original_name,
                "generatedAt": _timestamp(generated_at),
                "generator": f"{service_name} - {provenance}",
                "provenance": provenance,
                "imageType": document.mime_type,
                "imageSizeBytes": document.size_bytes,
            },
        },
        "model": model,
        "usage_info": {
            "image_processed": True,
            "image_size_bytes": document.size_bytes,
            "image_type": document.mime_type,
        },
    }


def error_envelope(message: str) -> dict[str, str]:
    return {"error": message}
