"""Example extraction adapter.

Use this module as a reference when implementing new OCR/vision adapters.
Implement BaseDocumentExtractor and register the provider in ExtractorFactory.
"""

from typing import ClassVar

from app.extraction.base import BaseDocumentExtractor
from app.extraction.models import ExtractionResult, UploadedDocument


class ExampleExtractorAdapter(BaseDocumentExtractor):
    """Example adapter that returns fixed content.

    No network calls. Useful for local development and tests. Image uploads
    get a draft component, everything else gets plain text.
    """

    DEFAULT_TEXT: ClassVar[str] = (
        "Example document\n\n"
        "This text stands in for OCR output so the generation chain can run "
        "without an extraction provider configured."
    )
    DEFAULT_COMPONENT_NAME: ClassVar[str] = "ExampleInvoice"
    DEFAULT_MARKUP: ClassVar[str] = (
        "const ExampleInvoice = () => {\n"
        "  return (\n"
        '    <div className="p-8 bg-white text-gray-900">\n'
        '      <h1 className="text-2xl font-bold">Invoice</h1>\n'
        "    </div>\n"
        "  );\n"
        "};\n\n"
        "export default ExampleInvoice;"
    )

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        if document.mime_type.startswith("image/"):
            return ExtractionResult(
                markup=self.DEFAULT_MARKUP,
                suggested_name=self.DEFAULT_COMPONENT_NAME,
            )
        return ExtractionResult(text=self.DEFAULT_TEXT)
