"""Tests for app/catalog/router.py - public reads and admin-only writes."""

import uuid

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(login, admin_user):
    return login(admin_user)


# --- reads ---


def test_list_is_public(client: TestClient, make_product):
    make_product()

    response = client.get("/catalog")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["page"] == 1
    assert data["items"][0]["title"] == "Classic Tee"
    assert data["items"][0]["metadata"]["weight_grams"] == 180
    assert len(data["items"][0]["print_areas"]) == 2


def test_list_query_params(client: TestClient, make_product):
    for index, cost in enumerate([5, 15, 25]):
        make_product(title=f"Tee {index}", base_cost=cost)

    response = client.get(
        "/catalog",
        params={"sort_by": "base_cost", "sort_order": "asc", "limit": 2, "page": 2},
    )

    assert response.status_code == 200
    data = response.json()
    assert [item["base_cost"] for item in data["items"]] == [25]
    assert data["total_pages"] == 2
    assert data["has_previous"] is True
    assert data["has_next"] is False


def test_list_filters_by_tags(client: TestClient, make_product):
    make_product(title="Summer Tee", tags=["summer"])
    make_product(title="Winter Tee", tags=["winter"])

    response = client.get("/catalog", params=[("tags", "winter")])

    assert [item["title"] for item in response.json()["items"]] == ["Winter Tee"]


@pytest.mark.parametrize(
    "params",
    [{"limit": 0}, {"limit": 101}, {"page": 0}, {"min_price": -1}],
)
def test_list_rejects_bad_params(client: TestClient, params):
    response = client.get("/catalog", params=params)

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"


def test_search_category_and_brand_routes(client: TestClient, make_product):
    make_product()
    make_product(title="Travel Mug", brand="Orca", category="mugs")

    search = client.get("/catalog/search/mug").json()
    category = client.get("/catalog/category/tshirts").json()
    brand = client.get("/catalog/brand/Orca").json()

    assert [item["title"] for item in search["items"]] == ["Travel Mug"]
    assert [item["title"] for item in category["items"]] == ["Classic Tee"]
    assert [item["title"] for item in brand["items"]] == ["Travel Mug"]


def test_unknown_category_is_rejected(client: TestClient):
    response = client.get("/catalog/category/spaceships")

    assert response.status_code == 400


def test_stats_overview(client: TestClient, make_product):
    make_product(base_cost=10)
    make_product(title="Hoodie", base_cost=30)

    response = client.get("/catalog/stats/overview")

    assert response.status_code == 200
    data = response.json()
    assert data["total_products"] == 2
    assert data["average_price"] == 20
    assert data["price_range"] == {"min": 10, "max": 30}
    assert data["by_brand"] == [{"brand": "Gildan", "count": 2}]


def test_get_product(client: TestClient, make_product):
    product = make_product()

    response = client.get(f"/catalog/{product.id}")

    assert response.status_code == 200
    assert response.json()["id"] == str(product.id)


def test_get_unknown_product(client: TestClient):
    response = client.get(f"/catalog/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["type"] == "product_not_found"


# --- writes ---


def test_create_product(client: TestClient, admin_headers, product_payload):
    response = client.post("/catalog", json=product_payload(), headers=admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Classic Tee"
    assert [area["name"] for area in data["print_areas"]] == ["front", "back"]
    assert data["currency"] == "USD"


def test_create_duplicate_product(client: TestClient, admin_headers, product_payload):
    client.post("/catalog", json=product_payload(), headers=admin_headers)

    response = client.post("/catalog", json=product_payload(), headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["type"] == "product_exists"


@pytest.mark.parametrize(
    "overrides",
    [
        {"print_areas": []},
        {"colors": []},
        {"base_cost": 0},
        {"title": ""},
        {"currency": "JPY"},
    ],
)
def test_create_rejects_invalid_payload(
    client: TestClient, admin_headers, product_payload, overrides
):
    response = client.post(
        "/catalog", json=product_payload(**overrides), headers=admin_headers
    )

    assert response.status_code == 400


def test_writes_require_authentication(
    client: TestClient, make_product, product_payload
):
    product = make_product()

    assert client.post("/catalog", json=product_payload()).status_code == 401
    assert client.patch(f"/catalog/{product.id}", json={}).status_code == 401
    assert client.delete(f"/catalog/{product.id}").status_code == 401


def test_writes_require_admin(
    client: TestClient, login, customer, make_product, product_payload
):
    product = make_product()
    headers = login(customer)

    create = client.post("/catalog", json=product_payload(), headers=headers)
    delete = client.delete(f"/catalog/{product.id}", headers=headers)

    assert create.status_code == 403
    assert delete.status_code == 403
    assert client.get(f"/catalog/{product.id}").status_code == 200


def test_update_product(client: TestClient, admin_headers, make_product):
    product = make_product()

    response = client.patch(
        f"/catalog/{product.id}",
        json={"base_cost": 12.75, "tags": ["premium"]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["base_cost"] == 12.75
    assert data["tags"] == ["premium"]
    assert len(data["print_areas"]) == 2


def test_update_rejects_null_title(client: TestClient, admin_headers, make_product):
    product = make_product()

    response = client.patch(
        f"/catalog/{product.id}", json={"title": None}, headers=admin_headers
    )

    assert response.status_code == 400


def test_delete_restore_and_hard_delete(
    client: TestClient, admin_headers, make_product
):
    product = make_product()
    url = f"/catalog/{product.id}"

    assert client.delete(url, headers=admin_headers).status_code == 204
    assert client.get(url).status_code == 404
    assert client.get("/catalog").json()["total"] == 0

    restored = client.patch(f"{url}/restore", headers=admin_headers)
    assert restored.status_code == 200
    assert client.get(url).status_code == 200

    assert client.delete(f"{url}/hard", headers=admin_headers).status_code == 204
    assert client.patch(f"{url}/restore", headers=admin_headers).status_code == 404
