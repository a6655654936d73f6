"""Tests for app/user/models.py - account invariants."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlmodel import Session

from app.core.exceptions import ConflictError
from app.db.commit import commit_or_conflict
from app.user.exceptions import EmailExistsError, RoleChangeError
from app.user.models import (
    AdminLevel,
    PreferredLanguage,
    User,
    UserRole,
    UserStatus,
    VerificationStatus,
    new_account,
)


def test_role_cannot_change(session: Session, customer: User):
    customer.role = UserRole.admin
    session.add(customer)

    with pytest.raises(RoleChangeError):
        session.commit()

    session.rollback()
    session.refresh(customer)
    assert customer.role == UserRole.customer


def test_other_fields_still_update(session: Session, customer: User):
    customer.display_name = "New Name"
    session.add(customer)
    session.commit()
    session.refresh(customer)

    assert customer.display_name == "New Name"


@given(
    transitions=st.lists(st.sampled_from(list(UserStatus)), min_size=1, max_size=10)
)
def test_deleted_at_tracks_deleted_status(transitions):
    user = new_account(UserRole.customer, email="t@example.com")
    for status in transitions:
        user.change_status(status)
        assert (user.status == UserStatus.deleted) == (user.deleted_at is not None)


def test_change_status_returns_previous():
    user = new_account(UserRole.creator, email="c@example.com")

    assert user.change_status(UserStatus.suspended) == UserStatus.active
    assert user.change_status(UserStatus.deleted) == UserStatus.suspended
    assert user.is_deleted


@pytest.mark.parametrize(
    ("role", "expected"),
    [
        (
            UserRole.customer,
            {
                "preferred_language": PreferredLanguage.ar,
                "shipping_addresses": [],
                "marketing_preferences": {},
            },
        ),
        (
            UserRole.creator,
            {
                "social_media_links": {},
                "verification_status": VerificationStatus.pending,
            },
        ),
        (UserRole.factory, {"verification_status": VerificationStatus.pending}),
        (UserRole.admin, {"admin_level": AdminLevel.support, "permissions": []}),
    ],
)
def test_new_account_role_defaults(role, expected):
    user = new_account(role, email="d@example.com")

    assert user.role == role
    for field, value in expected.items():
        assert getattr(user, field) == value


def test_new_account_explicit_fields_win():
    user = new_account(
        UserRole.admin, email="a@example.com", admin_level=AdminLevel.super_admin
    )

    assert user.is_super_admin


def test_duplicate_email_conflicts(session: Session, make_user):
    make_user(UserRole.customer, email="dup@example.com")
    session.add(new_account(UserRole.creator, email="dup@example.com", external_id="x"))

    with pytest.raises(EmailExistsError):
        commit_or_conflict(session, EmailExistsError())


def test_duplicate_external_id_conflicts(session: Session, make_user):
    make_user(UserRole.customer, external_id="same-uid")
    session.add(
        new_account(UserRole.customer, email="b@example.com", external_id="same-uid")
    )

    with pytest.raises(ConflictError):
        commit_or_conflict(session, ConflictError())


def test_pending_accounts_share_empty_external_id(session: Session, make_user):
    first = make_user(UserRole.factory, status=UserStatus.pending)
    second = make_user(UserRole.admin, status=UserStatus.pending)

    assert first.external_id == second.external_id == ""
