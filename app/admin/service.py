"""Admin provisioning and account management.

Factory and admin accounts are provisioned as pending invitations: the row is
created with an empty external_id and claimed later, when the invitee first
signs in with a verified Firebase identity for the same email (see
app.auth.resolution).
"""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.admin.exceptions import (
    AdminsAlreadyExistError,
    AdminTargetForbiddenError,
    EmployeeIdExistsError,
)
from app.admin.permissions import (
    default_permissions,
    ensure_active_admin,
    ensure_super_admin,
    generate_employee_id,
)
from app.admin.schemas import AdminCreate, FactoryCreate
from app.auth.service import FirebaseAuthServiceProtocol
from app.core.email import send_invitation_email
from app.core.exceptions import ConflictError
from app.core.pagination import paginate, total_pages
from app.core.settings import get_settings
from app.db.commit import commit_or_conflict
from app.user.exceptions import EmailExistsError, UserNotFoundError
from app.user.models import AdminLevel, User, UserRole, UserStatus, new_account
from app.user.schemas import FactoryLocation, ManufacturingCapabilities

logger = logging.getLogger(__name__)

DELETED_BY_ADMIN_REASON = "Account deleted by admin"


def _ensure_email_available(session: Session, email: str) -> None:
    existing = session.exec(
        select(User.id).where(func.lower(User.email) == email.lower())
    ).first()
    if existing is not None:
        raise EmailExistsError()


def _send_invitation(user: User) -> None:
    """Best-effort invitation email; failures never undo provisioning."""
    if not get_settings().resend_api_key:
        logger.info("Email delivery not configured; no invitation for %s", user.email)
        return
    try:
        send_invitation_email(
            user.email, name=user.display_name or user.email, role=user.role.value
        )
    except Exception as e:
        logger.warning("Invitation email to %s failed: %s", user.email, e)


def create_factory(session: Session, data: FactoryCreate, actor: User) -> User:
    """Provision a pending factory account.

    Raises:
        AdminRequiredError / AdminInactiveError: If actor is not an active admin
        EmailExistsError: If the email is already used
    """
    ensure_active_admin(actor)
    _ensure_email_available(session, data.email)

    location = FactoryLocation(
        address_line1=data.location.full_address
        or f"{data.location.city}, {data.location.region}",
        city=data.location.city,
        region=data.location.region,
        postal_code=data.location.postal_code,
        country=data.location.country,
    )
    capabilities_in = data.capabilities
    capabilities = ManufacturingCapabilities(
        printing_methods=(capabilities_in and capabilities_in.print_methods) or [],
        materials=(capabilities_in and capabilities_in.material_types) or [],
        product_types=(capabilities_in and capabilities_in.product_categories) or [],
        max_capacity_per_day=capabilities_in and capabilities_in.max_capacity_per_day,
    )

    factory = new_account(
        UserRole.factory,
        external_id="",
        email=data.email.lower(),
        display_name=data.name,
        status=UserStatus.pending,
        email_verified=False,
        company_name=data.business_name,
        company_description=data.business_description,
        contact_person=data.name,
        phone=data.phone,
        business_license=data.business_registration_number,
        tax_id=data.tax_id,
        location=location.model_dump(),
        capabilities=capabilities.model_dump(),
    )
    session.add(factory)
    commit_or_conflict(session, EmailExistsError())
    session.refresh(factory)
    logger.info(
        "Factory created by admin %s: %s (%s)", actor.id, factory.id, factory.email
    )
    _send_invitation(factory)
    return factory


def create_admin(session: Session, data: AdminCreate, actor: User) -> User:
    """Provision a pending admin account.

    Raises:
        SuperAdminRequiredError: If actor is not an active super admin
        EmailExistsError: If the email is already used
        EmployeeIdExistsError: If the requested employee id is taken
    """
    ensure_super_admin(actor)
    _ensure_email_available(session, data.email)

    if data.employee_id is not None:
        taken = session.exec(
            select(User.id).where(User.employee_id == data.employee_id)
        ).first()
        if taken is not None:
            raise EmployeeIdExistsError()

    if data.permissions is not None:
        permissions = [permission.value for permission in data.permissions]
    else:
        permissions = default_permissions(data.admin_role)

    admin = new_account(
        UserRole.admin,
        external_id="",
        email=data.email.lower(),
        display_name=data.name,
        status=UserStatus.pending,
        email_verified=False,
        phone=data.phone,
        admin_level=data.admin_role,
        permissions=permissions,
        department=data.department,
        position=data.job_title,
        employee_id=data.employee_id or generate_employee_id(),
    )
    session.add(admin)
    commit_or_conflict(session, ConflictError("Email or employee ID already in use"))
    session.refresh(admin)
    logger.info(
        "Admin created by super admin %s: %s (%s), level %s",
        actor.id,
        admin.id,
        admin.email,
        data.admin_role.value,
    )
    _send_invitation(admin)
    return admin


def get_user(session: Session, user_id: uuid.UUID) -> User:
    """Raises UserNotFoundError when no account has ``user_id``."""
    user = session.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def update_user_status(
    session: Session,
    user_id: uuid.UUID,
    new_status: UserStatus,
    reason: str | None,
    actor: User,
) -> User:
    """Change an account's status, keeping deleted_at consistent.

    Only super admins may change the status of admin accounts, even when the
    status would not change.

    Raises:
        AdminRequiredError / AdminInactiveError: If actor is not an active admin
        UserNotFoundError: If the target does not exist
        AdminTargetForbiddenError: If a non-super admin targets an admin
    """
    ensure_active_admin(actor)
    user = get_user(session, user_id)

    if user.role == UserRole.admin and not actor.is_super_admin:
        raise AdminTargetForbiddenError()

    old_status = user.change_status(new_status)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(
        "User status updated by admin %s: user %s status changed from %s to %s. "
        "Reason: %s",
        actor.id,
        user.id,
        old_status.value,
        new_status.value,
        reason,
    )
    return user


def delete_user(session: Session, user_id: uuid.UUID, actor: User) -> User:
    """Soft-delete an account."""
    return update_user_status(
        session, user_id, UserStatus.deleted, DELETED_BY_ADMIN_REASON, actor
    )


def hard_delete_user(session: Session, user_id: uuid.UUID, actor: User) -> None:
    """Permanently remove an account row. Super admins only."""
    ensure_super_admin(actor)
    user = get_user(session, user_id)
    session.delete(user)
    session.commit()
    logger.warning(
        "User %s (%s) permanently deleted by super admin %s",
        user_id,
        user.email,
        actor.id,
    )


def list_users(
    session: Session,
    page: int,
    limit: int,
    role: UserRole | None = None,
    status: UserStatus | None = None,
) -> tuple[Sequence[User], int, int]:
    """List accounts newest first with optional role/status filters.

    Returns:
        Tuple of (users, total, total_pages)
    """
    statement = select(User)
    if role is not None:
        statement = statement.where(User.role == role)
    if status is not None:
        statement = statement.where(User.status == status)
    statement = statement.order_by(col(User.created_at).desc(), col(User.id).desc())

    users, total = paginate(session, statement, page, limit)
    return users, total, total_pages(total, limit)


def bootstrap_super_admin(
    session: Session,
    auth_service: FirebaseAuthServiceProtocol,
    email: str,
    display_name: str | None = None,
) -> User:
    """Create the first, already active, super admin.

    The account is bound to the existing Firebase user with ``email`` so it can
    sign in right away. Later admins are provisioned through create_admin.

    Raises:
        AdminsAlreadyExistError: If any admin account exists
        UserNotFoundError: If no Firebase user has ``email``
        EmailExistsError: If a non-admin account already uses ``email``
    """
    existing_admin = session.exec(
        select(User.id).where(User.role == UserRole.admin)
    ).first()
    if existing_admin is not None:
        raise AdminsAlreadyExistError()

    record = auth_service.get_user_by_email(email)
    _ensure_email_available(session, email)

    admin = new_account(
        UserRole.admin,
        external_id=record.uid,
        email=(record.email or email).lower(),
        display_name=display_name or record.display_name,
        status=UserStatus.active,
        email_verified=record.email_verified,
        admin_level=AdminLevel.super_admin,
        permissions=default_permissions(AdminLevel.super_admin),
        employee_id=generate_employee_id(),
    )
    session.add(admin)
    commit_or_conflict(session, EmailExistsError())
    session.refresh(admin)
    logger.warning("Super admin bootstrapped: %s (%s)", admin.id, admin.email)
    return admin
