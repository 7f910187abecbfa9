class ApiError(Exception):
    """Base for errors rendered as ``{"error": message}`` responses."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UploadValidationError(ApiError):
    """Raised when the upload is missing, of the wrong type, or too large."""

    status_code = 400


class ProcessingFailedError(ApiError):
    """Raised when configuration or extraction prevents producing any artifact."""

    status_code = 500
