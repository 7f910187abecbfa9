class ConfigurationError(Exception):
    """Raised when a required setting (usually an API credential) is missing."""
