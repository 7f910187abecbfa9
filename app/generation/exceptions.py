class GenerationError(Exception):
    """Raised when a generation model call fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
