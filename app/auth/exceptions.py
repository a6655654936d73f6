"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
)


# Authentication errors (401)
class InvalidCredentialsError(AuthenticationError):
    """Raised when no usable credentials accompany the request."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when authentication token is invalid or expired."""

    error_type = "invalid_token"

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


class UnregisteredAccountError(AuthenticationError):
    """Raised when a verified identity has no local account yet."""

    error_type = "unregistered_account"

    def __init__(self, message: str = "No account is registered for this identity"):
        super().__init__(message)


# Authorization errors (403)
class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)


class SuperAdminRequiredError(AuthorizationError):
    """Raised when super admin privileges are required."""

    error_type = "super_admin_required"

    def __init__(self, message: str = "Super admin privileges required"):
        super().__init__(message)


class EmailNotVerifiedError(AuthorizationError):
    """Raised when claiming an invitation with an unverified email."""

    error_type = "email_not_verified"

    def __init__(
        self, message: str = "Email must be verified to accept an invitation"
    ):
        super().__init__(message)


# Validation errors (400)
class InvalidRoleError(BadRequestError):
    """Raised when self-registration asks for a role that is not self-service."""

    error_type = "invalid_role"

    def __init__(self, message: str = "Role is not available for self-registration"):
        super().__init__(message)


class EmailMismatchError(BadRequestError):
    """Raised when the submitted email differs from the token's email."""

    error_type = "email_mismatch"

    def __init__(self, message: str = "Email does not match the authenticated user"):
        super().__init__(message)


# Not found / conflict
class InvitationNotFoundError(NotFoundError):
    """Raised when no pending invitation exists for an email."""

    error_type = "invitation_not_found"

    def __init__(self, message: str = "No pending invitation found for this email"):
        super().__init__(message)


class AlreadyRegisteredError(ConflictError):
    """Raised when the identity is already bound to an account."""

    error_type = "already_registered"

    def __init__(self, message: str = "User already registered"):
        super().__init__(message)
