from fastapi import UploadFile

from app.api.exceptions import UploadValidationError
from app.extraction.models import UploadedDocument


async def read_upload(
    upload: UploadFile | None,
    *,
    field: str,
    label: str,
    mime_prefix: str,
    max_bytes: int,
) -> UploadedDocument:
    """Validate a multipart file field and load it into an UploadedDocument.

    Reads at most ``max_bytes + 1`` bytes so oversized payloads are rejected
    without buffering them whole.

    Raises:
        UploadValidationError: missing field, wrong MIME type, empty or oversized file.
    """
    if upload is None:
        raise UploadValidationError(
            f'No {label} file uploaded. Use key "{field}" in form-data.'
        )

    content_type = upload.content_type or ""
    if not content_type.startswith(mime_prefix):
        article = "an" if label[:1].lower() in "aeiou" else "a"
        raise UploadValidationError(f"Invalid file type. Please upload {article} {label} file.")

    if upload.size is not None and upload.size > max_bytes:
        raise UploadValidationError(_too_large(max_bytes))
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise UploadValidationError(_too_large(max_bytes))
    if not content:
        raise UploadValidationError(f"Uploaded {label} file is empty.")

    return UploadedDocument(
        content=content,
        mime_type=content_type,
        original_name=upload.filename or f"upload.{field}",
        size_bytes=len(content),
    )


def _too_large(max_bytes: int) -> str:
    return f"File exceeds max size of {max_bytes} bytes."
