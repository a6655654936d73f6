"""Tests for auth domain router."""

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.auth.service import VerifiedIdentity
from app.user.models import User, UserRole, UserStatus


def test_verify_creates_customer(client: TestClient, identities, session: Session):
    identities["fresh"] = VerifiedIdentity(
        uid="uid-fresh", email="fresh@example.com", email_verified=True, name="Fresh"
    )

    response = client.post("/auth/verify", json={"token": "fresh"})

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "customer"
    assert data["email"] == "fresh@example.com"
    assert data["preferred_language"] == "ar"
    assert "external_id" not in data
    assert "admin_level" not in data
    assert session.exec(select(User)).one().external_id == "uid-fresh"


def test_verify_creates_creator_when_requested(client: TestClient, identities):
    identities["creator"] = VerifiedIdentity(
        uid="uid-creator", email="creator@example.com", email_verified=True
    )

    response = client.post("/auth/verify", json={"token": "creator", "role": "creator"})

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "creator"
    assert data["verification_status"] == "pending"
    assert data["social_media_links"] == {}


def test_verify_rejects_factory_self_registration(client: TestClient, identities):
    identities["factory"] = VerifiedIdentity(
        uid="uid-f", email="f@example.com", email_verified=True
    )

    response = client.post("/auth/verify", json={"token": "factory", "role": "factory"})

    assert response.status_code == 400
    assert response.json()["type"] == "invalid_role"


def test_verify_invalid_token(client: TestClient):
    response = client.post("/auth/verify", json={"token": "not-a-token"})

    assert response.status_code == 401
    assert response.json()["type"] == "invalid_token"


def test_verify_missing_token_is_validation_error(client: TestClient):
    response = client.post("/auth/verify", json={})

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"


def test_verify_claims_pending_factory(
    client: TestClient, identities, make_user, session: Session
):
    invited = make_user(
        UserRole.factory, email="plant@example.com", status=UserStatus.pending
    )
    identities["plant"] = VerifiedIdentity(
        uid="uid-plant", email="plant@example.com", email_verified=True
    )

    response = client.post("/auth/verify", json={"token": "plant"})

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(invited.id)
    assert data["role"] == "factory"
    assert data["status"] == "active"
    session.refresh(invited)
    assert invited.external_id == "uid-plant"


def test_verify_returns_suspended_account(client: TestClient, make_user, login):
    suspended = make_user(UserRole.customer, status=UserStatus.suspended)
    token = login(suspended)["Authorization"].removeprefix("Bearer ")

    response = client.post("/auth/verify", json={"token": token})

    assert response.status_code == 200
    assert response.json()["status"] == "suspended"


def test_me_returns_role_shaped_account(client: TestClient, admin_user, login):
    response = client.get("/auth/me", headers=login(admin_user))

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "admin"
    assert data["admin_level"] == "admin"
    assert "preferred_language" not in data
    assert data["created_at"].endswith("Z")


def test_me_requires_token(client: TestClient):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["type"] == "invalid_credentials"


def test_me_unregistered_identity(client: TestClient, identities):
    identities["ghost"] = VerifiedIdentity(uid="uid-ghost", email="g@example.com")

    response = client.get("/auth/me", headers={"Authorization": "Bearer ghost"})

    assert response.status_code == 401
    assert response.json()["type"] == "unregistered_account"


def test_me_rejects_inactive_account(client: TestClient, make_user, login):
    suspended = make_user(UserRole.creator, status=UserStatus.suspended)

    response = client.get("/auth/me", headers=login(suspended))

    assert response.status_code == 403
    assert response.json()["type"] == "user_inactive"


def test_complete_registration(client: TestClient, identities, make_user):
    invited = make_user(
        UserRole.admin, email="staff@example.com", status=UserStatus.pending
    )
    identities["staff"] = VerifiedIdentity(
        uid="uid-staff", email="staff@example.com", email_verified=True
    )

    response = client.post(
        "/auth/complete-registration",
        json={"token": "staff", "email": "staff@example.com"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(invited.id)
    assert data["role"] == "admin"
    assert data["status"] == "active"


def test_complete_registration_without_invitation(client: TestClient, identities):
    identities["solo"] = VerifiedIdentity(
        uid="uid-solo", email="solo@example.com", email_verified=True
    )

    response = client.post(
        "/auth/complete-registration",
        json={"token": "solo", "email": "solo@example.com"},
    )

    assert response.status_code == 404
    assert response.json()["type"] == "invitation_not_found"


def test_complete_registration_email_mismatch(client: TestClient, identities):
    identities["solo"] = VerifiedIdentity(
        uid="uid-solo", email="solo@example.com", email_verified=True
    )

    response = client.post(
        "/auth/complete-registration",
        json={"token": "solo", "email": "other@example.com"},
    )

    assert response.status_code == 400
    assert response.json()["type"] == "email_mismatch"
