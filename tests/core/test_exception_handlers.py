"""Tests for app/core/exception_handlers.py - unified error responses."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.exception_handlers import (
    format_validation_errors,
    register_exception_handlers,
)
from app.core.exceptions import ConflictError, ProviderError


@pytest.fixture(name="error_client")
def error_client_fixture():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Email already exists")

    @app.get("/upstream")
    async def upstream():
        raise ProviderError()

    @app.get("/crash")
    async def crash():
        raise RuntimeError("database exploded")

    @app.get("/items/{item_id}")
    async def item(item_id: int, limit: int = 10):
        return {"item_id": item_id, "limit": limit}

    return TestClient(app, raise_server_exceptions=False)


def test_format_validation_errors():
    errors = [
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("query", "page"), "msg": "Input should be greater than 0"},
        {"loc": ("body",), "msg": "Field required"},
        {"loc": ("body", "print_areas", 0, "width"), "msg": "Input should be > 0"},
    ]

    assert format_validation_errors(errors) == (
        "email: value is not a valid email address; "
        "page: Input should be greater than 0; "
        "Field required; "
        "print_areas.0.width: Input should be > 0"
    )


def test_app_exception(error_client: TestClient):
    response = error_client.get("/conflict")

    assert response.status_code == 409
    assert response.json() == {"type": "conflict", "message": "Email already exists"}


def test_external_service_error(error_client: TestClient):
    response = error_client.get("/upstream")

    assert response.status_code == 502
    assert response.json()["type"] == "provider_error"


def test_unhandled_exception_hides_details(error_client: TestClient):
    response = error_client.get("/crash")

    assert response.status_code == 500
    assert response.json() == {
        "type": "internal_error",
        "message": "An unexpected error occurred",
    }


def test_request_validation_is_bad_request(error_client: TestClient):
    response = error_client.get("/items/abc", params={"limit": "many"})

    assert response.status_code == 400
    body = response.json()
    assert body["type"] == "validation_error"
    assert body["message"].startswith("item_id: ")
    assert "limit: " in body["message"]


@pytest.mark.parametrize(
    ("method", "path", "status", "error_type"),
    [
        ("get", "/does-not-exist", 404, "not_found"),
        ("post", "/conflict", 405, "method_not_allowed"),
    ],
)
def test_routing_errors(error_client: TestClient, method, path, status, error_type):
    response = getattr(error_client, method)(path)

    assert response.status_code == status
    assert response.json()["type"] == error_type
