class ExtractionError(Exception):
    """Raised when the extraction collaborator cannot produce content."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the OCR/vision provider call fails due to network/infrastructure issues."""


class EmptyExtractionError(ExtractionError):
    """Raised when extraction succeeded but returned nothing to generate from."""
