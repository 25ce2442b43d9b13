"""Custom exceptions for eolcheck."""


class EolCheckError(Exception):
    """Base exception for all eolcheck operations."""


class ConfigurationError(EolCheckError):
    """Raised when configuration validation fails."""


class FileProcessingError(EolCheckError):
    """Raised when file operations fail."""


class TemplateError(FileProcessingError):
    """Raised when the report template is missing or unusable."""


class APIError(EolCheckError):
    """Raised when a product could not be fetched from any endpoint."""

    def __init__(self, message: str, reason: str = "API request failed"):
        super().__init__(message)
        self.reason = reason


class InvalidResponseError(APIError):
    """Raised when an API body is neither a JSON array nor a JSON object."""

    def __init__(self, message: str, reason: str = "Invalid JSON"):
        super().__init__(message, reason)
