"""Integration tests for the catalogue endpoints."""

import pytest
from catalogue.api import category_router, product_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from shared.utils.exception_handlers import register_storefront_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(category_router)
    register_storefront_exception_handlers(app)
    return TestClient(app)


class TestProductListing:
    def test_lists_all_products(self, client, seeded):
        response = client.get("/products")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 15
        assert data["products"][0]["featured"] is True

    def test_filters_and_sorts(self, client, seeded):
        response = client.get("/products", params={"category": "clothing", "sort": "price-desc"})
        assert response.status_code == 200
        ids = [p["id"] for p in response.json()["products"]]
        assert ids == ["c4", "c2", "c3", "c1"]

    def test_multiple_categories(self, client, seeded):
        response = client.get("/products", params=[("categories", "clothing"), ("categories", "accessories")])
        assert response.json()["count"] == 7

    def test_text_search(self, client, seeded):
        response = client.get("/products", params={"q": "LEATHER"})
        assert {p["id"] for p in response.json()["products"]} == {"a1", "a3"}

    def test_invalid_sort_key(self, client, seeded):
        response = client.get("/products", params={"sort": "alphabetical"})
        assert response.status_code == 422

    def test_empty_catalogue(self, client):
        response = client.get("/products")
        assert response.json() == {"count": 0, "products": []}


class TestProductDetail:
    def test_product_detail_includes_derived_fields(self, client, seeded):
        response = client.get("/products/e1")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Wireless Noise-Canceling Headphones"
        assert data["discount_percentage"] == 14
        assert "wireless" in data["tags"]

    def test_unknown_product_is_404(self, client, seeded):
        response = client.get("/products/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_related_products(self, client, seeded):
        response = client.get("/products/h1/related")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert [p["id"] for p in data["products"]] == ["h2", "h3", "h4"]

    def test_related_for_unknown_product_is_404(self, client, seeded):
        assert client.get("/products/nope/related").status_code == 404


class TestCategories:
    def test_categories_with_counts(self, client, seeded):
        response = client.get("/categories")
        assert response.status_code == 200
        counts = {c["id"]: c["product_count"] for c in response.json()}
        assert counts["accessories"] == 3
        assert len(counts) == 4
