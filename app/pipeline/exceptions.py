class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""


class PipelineConfigurationError(PipelineError):
    """Raised when a fallback chain is built without a terminal step."""


class PipelineExhaustedError(PipelineError):
    """Raised when no step succeeded, which means the chain itself is broken."""
