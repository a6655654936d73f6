"""Tests for auth domain dependencies."""

from unittest.mock import MagicMock

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from sqlmodel import Session

from app.auth.dependencies import (
    get_admin_user,
    get_current_account,
    get_current_user,
    get_super_admin_user,
    verify_bearer_token,
)
from app.auth.exceptions import (
    AdminRequiredError,
    InvalidCredentialsError,
    SuperAdminRequiredError,
    UnregisteredAccountError,
)
from app.auth.service import FirebaseAuthService, VerifiedIdentity
from app.user.exceptions import UserInactiveError
from app.user.models import User, UserRole, UserStatus


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_verify_bearer_token_missing():
    firebase_auth = MagicMock(spec=FirebaseAuthService)

    with pytest.raises(InvalidCredentialsError):
        verify_bearer_token(firebase_auth, None)

    firebase_auth.verify_id_token.assert_not_called()


def test_verify_bearer_token_delegates_to_firebase():
    firebase_auth = MagicMock(spec=FirebaseAuthService)
    identity = VerifiedIdentity(uid="uid-1", email="a@example.com")
    firebase_auth.verify_id_token.return_value = identity

    assert verify_bearer_token(firebase_auth, _credentials("tok")) is identity
    firebase_auth.verify_id_token.assert_called_once_with("tok")


def test_get_current_account_unregistered(session: Session):
    with pytest.raises(UnregisteredAccountError):
        get_current_account(VerifiedIdentity(uid="nobody"), session)


def test_get_current_account_any_status(session: Session, make_user):
    suspended = make_user(
        UserRole.customer, status=UserStatus.suspended, external_id="uid-s"
    )

    user = get_current_account(VerifiedIdentity(uid="uid-s"), session)

    assert user.id == suspended.id


@pytest.mark.parametrize(
    "status", [UserStatus.pending, UserStatus.suspended, UserStatus.deleted]
)
def test_get_current_user_requires_active(status):
    user = User(role=UserRole.customer, email="x@example.com", status=status)

    with pytest.raises(UserInactiveError):
        get_current_user(user)


def test_get_admin_user_rejects_other_roles(customer: User):
    with pytest.raises(AdminRequiredError):
        get_admin_user(customer)


def test_get_admin_user_accepts_any_level(admin_user: User):
    assert get_admin_user(admin_user) is admin_user


def test_get_super_admin_user(admin_user: User, super_admin: User):
    with pytest.raises(SuperAdminRequiredError):
        get_super_admin_user(admin_user)

    assert get_super_admin_user(super_admin) is super_admin
