"""Uploads domain exceptions."""

from app.core.exceptions import ExternalServiceError, ValidationError


class InvalidFileError(ValidationError):
    """Raised when an uploaded file is missing, too large or of a disallowed type."""

    error_type = "invalid_file"

    def __init__(self, message: str = "Invalid file"):
        super().__init__(message)


class StorageError(ExternalServiceError):
    """Raised when object storage rejects an operation."""

    error_type = "storage_error"

    def __init__(self, message: str = "File storage operation failed"):
        super().__init__(message)
