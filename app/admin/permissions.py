"""Admin authorization checks and permission defaults.

Route dependencies (app.auth.dependencies) guard the HTTP surface; the
helpers here repeat the checks at the top of each admin service operation.
"""

import secrets

from app.admin.exceptions import AdminInactiveError
from app.auth.exceptions import AdminRequiredError, SuperAdminRequiredError
from app.user.models import AdminLevel, AdminPermission, User, UserRole

DEFAULT_PERMISSIONS: dict[AdminLevel, tuple[AdminPermission, ...]] = {
    AdminLevel.super_admin: tuple(AdminPermission),
    AdminLevel.admin: (
        AdminPermission.user_management,
        AdminPermission.factory_management,
        AdminPermission.order_management,
        AdminPermission.analytics_access,
    ),
    AdminLevel.moderator: (
        AdminPermission.user_management,
        AdminPermission.order_management,
        AdminPermission.support_tickets,
    ),
    AdminLevel.support: (
        AdminPermission.support_tickets,
        AdminPermission.order_management,
    ),
}


def default_permissions(level: AdminLevel) -> list[str]:
    return [permission.value for permission in DEFAULT_PERMISSIONS[level]]


def generate_employee_id() -> str:
    """``EMP`` followed by 10 random uppercase hex digits."""
    return f"EMP{secrets.token_hex(5).upper()}"


def ensure_active_admin(actor: User) -> None:
    """Raises AdminRequiredError or AdminInactiveError."""
    if actor.role != UserRole.admin:
        raise AdminRequiredError()
    if not actor.is_active:
        raise AdminInactiveError()


def ensure_super_admin(actor: User) -> None:
    ensure_active_admin(actor)
    if actor.admin_level != AdminLevel.super_admin:
        raise SuperAdminRequiredError()
