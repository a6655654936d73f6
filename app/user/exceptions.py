"""User domain exceptions.

User-related exceptions for not found, inactive, and conflict scenarios.
"""

from app.core.exceptions import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
)


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UserInactiveError(AuthorizationError):
    """Raised when user is not active in local database."""

    error_type = "user_inactive"

    def __init__(self, message: str = "User is inactive"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when an email is already used by another account."""

    error_type = "email_exists"

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class ProfileRoleError(BadRequestError):
    """Raised when a role has no self-service profile."""

    error_type = "profile_not_supported"

    def __init__(self, message: str = "Profile is not available for this role"):
        super().__init__(message)


class RoleChangeError(InternalError):
    """Raised when a flush would change an account's role."""

    error_type = "role_immutable"

    def __init__(self, message: str = "User role cannot be changed"):
        super().__init__(message)
