"""Tests for app/health/router.py - liveness and database checks."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from app.core.settings import get_settings
from app.db.engine import get_session
from app.main import app


def test_health_ok(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "database": "ok",
        "environment": get_settings().env_name,
    }


def test_health_database_unreachable():
    mock_session = MagicMock(spec=Session)
    mock_session.exec.side_effect = OperationalError(
        "SELECT 1", {}, Exception("connection refused")
    )
    app.dependency_overrides[get_session] = lambda: mock_session

    try:
        response = TestClient(app).get("/health")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json() == {
        "status": "unhealthy",
        "database": "error",
        "environment": get_settings().env_name,
    }
