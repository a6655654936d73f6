"""User domain models.

All accounts live in one ``users`` table discriminated by ``role``. Columns
that only make sense for one role are nullable; app.user.schemas exposes the
role-shaped views.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import EmailStr
from sqlalchemy import JSON, Index, event, inspect, text
from sqlmodel import Field, SQLModel

from app.core.mixins import SoftDeleteMixin, TimestampMixin, utc_now
from app.user.exceptions import RoleChangeError


class UserRole(str, Enum):
    customer = "customer"
    creator = "creator"
    factory = "factory"
    admin = "admin"


class UserStatus(str, Enum):
    """User account status.

    - active: Account usable
    - pending: Provisioned by an admin, not yet claimed by a Firebase user
    - suspended: Blocked by an admin
    - deleted: Soft-deleted (deleted_at is set)
    """

    active = "active"
    pending = "pending"
    suspended = "suspended"
    deleted = "deleted"


class AdminLevel(str, Enum):
    super_admin = "super_admin"
    admin = "admin"
    moderator = "moderator"
    support = "support"


class AdminPermission(str, Enum):
    user_management = "user-management"
    factory_management = "factory-management"
    product_management = "product-management"
    order_management = "order-management"
    analytics_access = "analytics-access"
    system_configuration = "system-configuration"
    audit_logs = "audit-logs"
    support_tickets = "support-tickets"


class VerificationStatus(str, Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class PreferredLanguage(str, Enum):
    ar = "ar"
    en = "en"


SELF_SERVICE_ROLES = frozenset({UserRole.customer, UserRole.creator})


class User(TimestampMixin, SoftDeleteMixin, SQLModel, table=True):
    """User database model.

    Note: external_id is internal-only (Firebase UID) and should
    never be exposed in API responses. It is empty for pending accounts.
    """

    __tablename__: str = "users"
    __table_args__ = (
        Index(
            "uq_users_external_id",
            "external_id",
            unique=True,
            sqlite_where=text("external_id != ''"),
            postgresql_where=text("external_id != ''"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    external_id: str = Field(default="", index=True, max_length=128)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    display_name: str | None = Field(default=None, max_length=100)
    role: UserRole = Field(index=True)
    status: UserStatus = Field(default=UserStatus.active, index=True)
    email_verified: bool = Field(default=False)
    profile_image_url: str | None = Field(default=None, max_length=1024)
    last_login_at: datetime | None = Field(default=None)

    # Shared by customers, creators, factories and admins
    phone: str | None = Field(default=None, max_length=32)
    # Customers and creators
    profile_completion: int = Field(default=0)

    # Customer
    preferred_language: PreferredLanguage | None = Field(default=None)
    shipping_addresses: list[dict[str, Any]] | None = Field(
        default=None, sa_type=JSON
    )
    marketing_preferences: dict[str, Any] | None = Field(default=None, sa_type=JSON)

    # Creator
    business_name: str | None = Field(default=None, max_length=150)
    business_description: str | None = Field(default=None)
    social_media_links: dict[str, Any] | None = Field(default=None, sa_type=JSON)
    # Creators and factories
    verification_status: VerificationStatus | None = Field(default=None)

    # Factory
    company_name: str | None = Field(default=None, max_length=200)
    company_description: str | None = Field(default=None)
    contact_person: str | None = Field(default=None, max_length=100)
    business_license: str | None = Field(default=None, max_length=50)
    tax_id: str | None = Field(default=None, max_length=50)
    location: dict[str, Any] | None = Field(default=None, sa_type=JSON)
    capabilities: dict[str, Any] | None = Field(default=None, sa_type=JSON)

    # Admin
    employee_id: str | None = Field(default=None, unique=True, max_length=50)
    admin_level: AdminLevel | None = Field(default=None)
    permissions: list[str] | None = Field(default=None, sa_type=JSON)
    department: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active

    @property
    def is_pending(self) -> bool:
        return self.status == UserStatus.pending

    @property
    def is_super_admin(self) -> bool:
        return (
            self.role == UserRole.admin
            and self.admin_level == AdminLevel.super_admin
        )

    def change_status(self, new_status: UserStatus) -> UserStatus:
        """Move to ``new_status`` keeping deleted_at in step with it.

        Returns the previous status.
        """
        old_status = self.status
        self.status = new_status
        if new_status == UserStatus.deleted:
            self.deleted_at = utc_now()
        else:
            self.deleted_at = None
        return old_status


def new_account(role: UserRole, **fields: Any) -> User:
    """Build an unsaved account with the defaults its role requires."""
    match role:
        case UserRole.customer:
            defaults: dict[str, Any] = {
                "preferred_language": PreferredLanguage.ar,
                "shipping_addresses": [],
                "marketing_preferences": {},
            }
        case UserRole.creator:
            defaults = {
                "social_media_links": {},
                "verification_status": VerificationStatus.pending,
            }
        case UserRole.factory:
            defaults = {"verification_status": VerificationStatus.pending}
        case UserRole.admin:
            defaults = {"admin_level": AdminLevel.support, "permissions": []}
        case _:
            raise ValueError(f"Unsupported user role: {role!r}")
    return User(role=role, **{**defaults, **fields})


@event.listens_for(User, "before_update")
def _reject_role_change(_mapper: Any, _connection: Any, target: User) -> None:
    history = inspect(target).attrs.role.history
    if history.deleted and history.added and history.deleted[0] != history.added[0]:
        raise RoleChangeError()
