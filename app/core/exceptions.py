"""Error families shared by every domain.

Each family fixes an HTTP status; concrete errors in app/<domain>/exceptions.py
subclass a family and set their own ``error_type``. The global handlers turn
any of them into ``{"type": error_type, "message": message}``.
"""


class AppException(Exception):
    """Root of the hierarchy. Unclassified failures map to 500."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


# 401
class AuthenticationError(AppException):
    """The caller could not be identified from the bearer token."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


# 403
class AuthorizationError(AppException):
    """The caller is known but not allowed to do this."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


# 404
class NotFoundError(AppException):
    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


# 409
class ConflictError(AppException):
    """A unique value is already taken.

    Raised both by explicit pre-checks and when the database rejects a write
    with a constraint violation.
    """

    status_code = 409
    error_type = "conflict"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


# 400
class ValidationError(AppException):
    """Input is well-formed but breaks a business rule."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class BadRequestError(ValidationError):
    error_type = "bad_request"

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


# 502
class ExternalServiceError(AppException):
    """Firebase, Cloud Storage or another upstream failed."""

    status_code = 502
    error_type = "external_service_error"

    def __init__(self, message: str = "External service error"):
        super().__init__(message)


class ProviderError(ExternalServiceError):
    """An upstream answered, but not with what we expected."""

    error_type = "provider_error"

    def __init__(self, message: str = "Upstream provider returned an invalid response"):
        super().__init__(message)


class InternalError(AppException):
    """Stored data is inconsistent with what the code expects."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message)
