"""Account resolution: map a verified Firebase identity to a local account.

Resolution order:
1. An account already bound to the identity's uid is refreshed from the token.
2. A pending invitation for the identity's email is claimed.
3. Otherwise a new self-service account is created.
"""

import logging

from sqlalchemy import func
from sqlmodel import Session, select

from app.auth.exceptions import (
    AlreadyRegisteredError,
    EmailMismatchError,
    EmailNotVerifiedError,
    InvalidRoleError,
    InvitationNotFoundError,
)
from app.auth.service import VerifiedIdentity
from app.core.exceptions import BadRequestError
from app.core.mixins import utc_now
from app.db.commit import commit_or_conflict
from app.user.exceptions import EmailExistsError
from app.user.models import (
    SELF_SERVICE_ROLES,
    User,
    UserRole,
    UserStatus,
    new_account,
)
from app.user.profile import refresh_profile_completion

logger = logging.getLogger(__name__)


def get_account_by_external_id(session: Session, external_id: str) -> User | None:
    if not external_id:
        return None
    return session.exec(select(User).where(User.external_id == external_id)).first()


def find_pending_invitation(session: Session, email: str) -> User | None:
    """Find an unclaimed account provisioned for ``email`` (case-insensitive)."""
    return session.exec(
        select(User).where(
            func.lower(User.email) == email.lower(),
            User.status == UserStatus.pending,
            User.external_id == "",
        )
    ).first()


def _email_taken(session: Session, email: str, exclude: User | None = None) -> bool:
    statement = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude is not None:
        statement = statement.where(User.id != exclude.id)
    return session.exec(statement).first() is not None


def _apply_identity(user: User, identity: VerifiedIdentity) -> None:
    if identity.email:
        user.email = identity.email
    if identity.name:
        user.display_name = identity.name
    if identity.picture:
        user.profile_image_url = identity.picture
    user.email_verified = identity.email_verified
    user.last_login_at = utc_now()
    refresh_profile_completion(user)


def _sync_existing(session: Session, user: User, identity: VerifiedIdentity) -> User:
    if identity.email and _email_taken(session, identity.email, exclude=user):
        raise EmailExistsError("Email already in use by another account")
    _apply_identity(user, identity)
    session.add(user)
    commit_or_conflict(
        session, EmailExistsError("Email already in use by another account")
    )
    session.refresh(user)
    return user


def _claim_invitation(
    session: Session, invitation: User, identity: VerifiedIdentity
) -> User:
    if not identity.email_verified:
        raise EmailNotVerifiedError()

    invitation.external_id = identity.uid
    invitation.change_status(UserStatus.active)
    _apply_identity(invitation, identity)
    session.add(invitation)
    commit_or_conflict(session, AlreadyRegisteredError())
    session.refresh(invitation)
    logger.info(
        "Invitation claimed: user %s (%s), role %s",
        invitation.id,
        invitation.email,
        invitation.role.value,
    )
    return invitation


def _register(session: Session, identity: VerifiedIdentity, role: UserRole) -> User:
    if role not in SELF_SERVICE_ROLES:
        raise InvalidRoleError(
            f"Role '{role.value}' is not available for self-registration"
        )
    if not identity.email:
        raise BadRequestError("Authenticated identity has no email address")
    if _email_taken(session, identity.email):
        raise EmailExistsError()

    user = new_account(
        role,
        external_id=identity.uid,
        email=identity.email,
        status=UserStatus.active,
    )
    _apply_identity(user, identity)
    session.add(user)
    commit_or_conflict(session, EmailExistsError())
    session.refresh(user)
    logger.info("Created new user %s (%s), role %s", user.id, user.email, role.value)
    return user


def resolve_account(
    session: Session,
    identity: VerifiedIdentity,
    requested_role: UserRole | None = None,
) -> User:
    """Find, claim or create the local account for a verified identity.

    ``requested_role`` only matters when a new account is created; it
    defaults to customer.

    Raises:
        EmailNotVerifiedError: Claiming an invitation with an unverified email
        InvalidRoleError: Self-registering as factory or admin
        EmailExistsError: The email belongs to another account
    """
    user = get_account_by_external_id(session, identity.uid)
    if user is not None:
        return _sync_existing(session, user, identity)

    if identity.email:
        invitation = find_pending_invitation(session, identity.email)
        if invitation is not None:
            return _claim_invitation(session, invitation, identity)

    return _register(session, identity, requested_role or UserRole.customer)


def complete_pending_registration(
    session: Session, identity: VerifiedIdentity, email: str
) -> User:
    """Explicitly claim the pending invitation for ``email``.

    Raises:
        EmailMismatchError: ``email`` differs from the token's email
        AlreadyRegisteredError: The identity is already bound to an account
        InvitationNotFoundError: No pending invitation for ``email``
        EmailNotVerifiedError: The token's email is not verified
    """
    if not identity.email or identity.email.lower() != email.lower():
        raise EmailMismatchError()

    if get_account_by_external_id(session, identity.uid) is not None:
        raise AlreadyRegisteredError()

    invitation = find_pending_invitation(session, email)
    if invitation is None:
        raise InvitationNotFoundError()

    return _claim_invitation(session, invitation, identity)
