"""Admin domain exceptions."""

from app.core.exceptions import AuthorizationError, ConflictError


class AdminInactiveError(AuthorizationError):
    """Raised when an admin account that is not active attempts an admin action."""

    error_type = "admin_inactive"

    def __init__(self, message: str = "Admin account is not active"):
        super().__init__(message)


class AdminTargetForbiddenError(AuthorizationError):
    """Raised when a non-super admin tries to modify an admin account."""

    error_type = "admin_target_forbidden"

    def __init__(self, message: str = "Only super admins can modify admin accounts"):
        super().__init__(message)


class EmployeeIdExistsError(ConflictError):
    """Raised when an employee id is already assigned."""

    error_type = "employee_id_exists"

    def __init__(self, message: str = "Employee ID already in use"):
        super().__init__(message)


class AdminsAlreadyExistError(ConflictError):
    """Raised when bootstrapping a super admin while admin accounts exist."""

    error_type = "admins_exist"

    def __init__(
        self, message: str = "An admin account already exists; use the admin API"
    ):
        super().__init__(message)
