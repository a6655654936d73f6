from collections.abc import Callable
from typing import Any

import pytest
from sqlmodel import Session

from app.catalog.models import BaseProduct
from app.catalog.schemas import ProductCreate
from app.catalog.service import create_product


def build_product_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Classic Tee",
        "description": "Heavyweight cotton t-shirt",
        "brand": "Gildan",
        "category": "tshirts",
        "material": "100% Cotton",
        "base_cost": 9.5,
        "currency": "USD",
        "country": "Turkey",
        "colors": ["white", "black"],
        "available_sizes": ["S", "M", "L"],
        "tags": ["basic", "cotton"],
        "metadata": {"weight_grams": 180, "care_instructions": "Wash cold"},
        "print_areas": [
            {
                "name": "front",
                "x": 10,
                "y": 20,
                "width": 300,
                "height": 400,
                "mockup_url": "https://cdn.example.com/tee-front.png",
            },
            {
                "name": "back",
                "x": 10,
                "y": 20,
                "width": 300,
                "height": 420,
                "mockup_url": "https://cdn.example.com/tee-back.png",
                "dpi": 150,
            },
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(name="product_payload")
def product_payload_fixture() -> Callable[..., dict[str, Any]]:
    """Valid create payload; keyword args override fields."""
    return build_product_payload


@pytest.fixture(name="make_product")
def make_product_fixture(session: Session) -> Callable[..., BaseProduct]:
    """Persist a product through the service; keyword args override the payload."""

    def _make(**overrides: Any) -> BaseProduct:
        return create_product(
            session, ProductCreate.model_validate(build_product_payload(**overrides))
        )

    return _make
