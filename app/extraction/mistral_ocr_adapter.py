from typing import Any

import httpx

from app.config.exceptions import ConfigurationError
from app.extraction.base import BaseDocumentExtractor
from app.extraction.exceptions import ExtractionError, ExtractionNetworkError
from app.extraction.models import ExtractionResult, UploadedDocument
from app.logging.logger import Log


class MistralOcrAdapter(BaseDocumentExtractor):
    """Extracts page markdown from a PDF via the Mistral OCR API.

    Flow: upload file (purpose=ocr) -> fetch signed URL -> run OCR on the URL.
    """

    UPLOAD_FILE_NAME = "uploaded_file.pdf"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        model: str,
        timeout_seconds: int,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("mistral_api_key is not set")
        self._model = model
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
        )
        self._client.headers["Authorization"] = f"Bearer {api_key}"

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        if not document.content:
            raise ExtractionError("Invalid PDF file: empty buffer")
        try:
            file_id = await self._upload(document.content)
            signed_url = await self._signed_url(file_id)
            payload = await self._ocr(signed_url)
        except httpx.HTTPStatusError as exc:
            raise ExtractionNetworkError(
                f"OCR provider API error: {exc.response.status_code} {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ExtractionNetworkError(f"OCR provider network error: {exc}") from exc

        pages = payload.get("pages")
        if not isinstance(pages, list):
            raise ExtractionError("Invalid OCR response format")
        markdown = [
            page["markdown"]
            for page in pages
            if isinstance(page, dict) and page.get("markdown")
        ]
        Log.info("Mistral OCR finished", model=self._model, pages=len(pages))
        return ExtractionResult(text="\n\n".join(markdown).strip(), pages_count=len(pages))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _upload(self, content: bytes) -> str:
        response = await self._client.post(
            "/files",
            data={"purpose": "ocr"},
            files={"file": (self.UPLOAD_FILE_NAME, content, "application/pdf")},
        )
        response.raise_for_status()
        return str(self._json(response)["id"])

    async def _signed_url(self, file_id: str) -> str:
        response = await self._client.get(f"/files/{file_id}/url", params={"expiry": 1})
        response.raise_for_status()
        return str(self._json(response)["url"])

    async def _ocr(self, document_url: str) -> dict[str, Any]:
        response = await self._client.post(
            "/ocr",
            json={
                "model": self._model,
                "document": {"type": "document_url", "document_url": document_url},
                "include_image_base64": False,
            },
        )
        response.raise_for_status()
        return self._json(response)

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise ExtractionError(f"OCR provider returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ExtractionError("OCR provider response must be an object")
        return data
