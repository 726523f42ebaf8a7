"""HTTP boundary tests using FastAPI's TestClient and a fake repository."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from catalog.domain.exceptions import StoreError
from catalog.infrastructure.api.app import create_app
from catalog.infrastructure.api.deps import get_product_repository
from tests.fakes import FakeProductRepository


@pytest.fixture
def repo():
    return FakeProductRepository()


@pytest.fixture
def client(repo):
    app = create_app()
    app.dependency_overrides[get_product_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client


def _create(client, code: str = "WID-001", **overrides) -> str:
    body = {
        "code": code,
        "name": "Widget",
        "description": "A useful widget",
        "price": "15.00",
        "stock": 10,
    }
    body.update(overrides)
    response = client.post("/products", json=body)
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestCreateEndpoint:

    def test_created_returns_id(self, client):
        response = client.post(
            "/products",
            json={"code": "WID-001", "name": "Widget", "price": "15.00", "stock": 10},
        )
        assert response.status_code == 201
        assert set(response.json()) == {"id"}
        assert response.headers["location"] == f"/products/{response.json()['id']}"

    def test_validation_failure_is_400(self, client):
        response = client.post(
            "/products",
            json={"code": "", "name": "Widget", "price": "1", "stock": 1},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Code cannot be empty"}

    def test_location_resolves_to_new_product(self, client):
        response = client.post(
            "/products",
            json={"code": "WID-001", "name": "Widget", "price": "15.00", "stock": 10},
        )
        follow = client.get(response.headers["location"])
        assert follow.status_code == 200
        assert follow.json()["code"] == "WID-001"

    def test_fractional_cents_is_400(self, client):
        response = client.post(
            "/products",
            json={"code": "WID-001", "name": "Widget", "price": "19.999", "stock": 1},
        )
        assert response.status_code == 400
        assert "decimal places" in response.json()["error"]

    def test_duplicate_code_is_400(self, client):
        _create(client, "WID-001")
        response = client.post(
            "/products",
            json={"code": "WID-001", "name": "Other", "price": "1", "stock": 1},
        )
        assert response.status_code == 400
        assert "WID-001" in response.json()["error"]

    def test_malformed_body_is_400(self, client):
        response = client.post("/products", json={"code": "WID-001", "name": "Widget"})
        assert response.status_code == 400
        assert "price" in response.json()["error"]

    def test_store_failure_is_500(self, client, repo):
        repo.fail_next_save = StoreError("disk full")
        response = client.post(
            "/products",
            json={"code": "WID-001", "name": "Widget", "price": "1", "stock": 1},
        )
        assert response.status_code == 500
        assert "disk full" in response.json()["error"]


class TestReadEndpoints:

    def test_get_returns_camel_case_projection(self, client):
        product_id = _create(client)
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == product_id
        assert body["code"] == "WID-001"
        assert body["description"] == "A useful widget"
        assert Decimal(str(body["price"])) == Decimal("15.00")
        assert body["stock"] == 10
        assert "createdAt" in body
        assert body["updatedAt"] is None

    def test_get_unknown_is_404(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Product with ID missing not found"}

    def test_list_paginates_by_code(self, client):
        for n in range(15, 0, -1):
            _create(client, f"P{n:02d}", name=f"Product {n}")

        response = client.get("/products", params={"page": 2, "pageSize": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["totalItems"] == 15
        assert body["totalPages"] == 3
        assert body["page"] == 2
        assert body["pageSize"] == 5
        assert [item["code"] for item in body["items"]] == [
            "P06", "P07", "P08", "P09", "P10",
        ]
        assert body["items"][0] == {"code": "P06", "name": "Product 6"}

    def test_list_defaults(self, client):
        _create(client)
        body = client.get("/products").json()
        assert body["page"] == 1
        assert body["pageSize"] == 10

    def test_bad_query_parameter_is_400(self, client):
        response = client.get("/products", params={"page": "first"})
        assert response.status_code == 400
        assert "error" in response.json()


class TestWriteEndpoints:

    def test_update_is_204(self, client):
        product_id = _create(client)
        response = client.put(
            f"/products/{product_id}",
            json={"name": "Gadget", "description": "", "price": "29.99", "stock": 3},
        )
        assert response.status_code == 204
        assert client.get(f"/products/{product_id}").json()["name"] == "Gadget"

    def test_update_validation_failure_is_400(self, client):
        product_id = _create(client)
        response = client.put(
            f"/products/{product_id}",
            json={"name": "Gadget", "price": "-1", "stock": 3},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Price cannot be negative"}

    def test_update_unknown_is_404(self, client):
        response = client.put(
            "/products/missing",
            json={"name": "Gadget", "price": "1", "stock": 1},
        )
        assert response.status_code == 404

    def test_delete_is_204_then_404(self, client):
        product_id = _create(client)
        assert client.delete(f"/products/{product_id}").status_code == 204
        assert client.get(f"/products/{product_id}").status_code == 404
        second = client.delete(f"/products/{product_id}")
        assert second.status_code == 404
        assert "error" in second.json()

    def test_deleted_products_not_listed(self, client):
        keep = _create(client, "A")
        gone = _create(client, "B")
        client.delete(f"/products/{gone}")
        body = client.get("/products").json()
        assert body["totalItems"] == 1
        assert client.get(f"/products/{keep}").status_code == 200

    def test_adjust_stock_returns_new_level(self, client):
        product_id = _create(client, stock=10)
        response = client.post(
            f"/products/{product_id}/stock-adjustments", json={"delta": -4}
        )
        assert response.status_code == 200
        assert response.json() == {"stock": 6}

    def test_adjust_stock_insufficient_is_400(self, client):
        product_id = _create(client, stock=1)
        response = client.post(
            f"/products/{product_id}/stock-adjustments", json={"delta": -2}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Insufficient stock"}

    def test_adjust_stock_unknown_is_404(self, client):
        response = client.post("/products/missing/stock-adjustments", json={"delta": 1})
        assert response.status_code == 404
