"""Integration tests for the Product endpoints (ADMIN only)."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


def _detail(product, suffix=""):
    return f"{URL}{product.id}/{suffix}"


class TestAccess:
    def test_anonymous_rejected(self, api_client):
        assert api_client.get(URL).status_code == 401

    def test_client_forbidden(self, client_api):
        response = client_api.get(URL)
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"


class TestCreate:
    def test_create_generates_lot_code(self, admin_api):
        response = admin_api.post(
            URL, {"name": "Desk Lamp", "price": "49.90", "stock": 5}, format="json"
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["lot_code"] == "LOT-0001"
        assert data["price"] == 49.9
        assert data["stock"] == 5

    def test_duplicate_lot_code(self, admin_api, product_factory):
        product_factory(lot_code="LOT-7777")
        response = admin_api.post(
            URL,
            {"name": "Desk Lamp", "price": "1.00", "stock": 1, "lot_code": "LOT-7777"},
            format="json",
        )
        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Desk Lamp", "price": "0", "stock": 1},
            {"name": "Desk Lamp", "price": "1.00", "stock": -1},
            {"name": "DL", "price": "1.00", "stock": 1},
        ],
    )
    def test_invalid_payload(self, admin_api, payload):
        response = admin_api.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Validation failed."


class TestReadUpdateDelete:
    def test_list_is_paginated(self, admin_api, product_factory):
        for i in range(3):
            product_factory(name=f"Item {i}")
        response = admin_api.get(URL, {"limit": 2})
        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 2
        assert body["meta"]["pagination"] == {
            "page": 1,
            "limit": 2,
            "total": 3,
            "totalPages": 2,
        }

    def test_search_filter(self, admin_api, product_factory):
        product_factory(name="Blue Pen")
        product_factory(name="Red Chair")
        response = admin_api.get(URL, {"search": "pen"})
        assert [p["name"] for p in response.json()["data"]] == ["Blue Pen"]

    def test_retrieve_missing(self, admin_api):
        response = admin_api.get(f"{URL}00000000-0000-0000-0000-000000000000/")
        assert response.status_code == 404

    def test_patch_updates_fields(self, admin_api, product_factory):
        product = product_factory(name="Old Name", stock=4)
        response = admin_api.patch(
            _detail(product), {"name": "New Name", "price": "12.34"}, format="json"
        )
        assert response.status_code == 200
        product.refresh_from_db()
        assert product.name == "New Name"
        assert product.price == Decimal("12.34")
        assert product.stock == 4

    def test_delete_is_soft(self, admin_api, product_factory):
        product = product_factory()
        response = admin_api.delete(_detail(product))
        assert response.status_code == 200
        product.refresh_from_db()
        assert product.is_active is False
        assert admin_api.get(URL).json()["data"] == []
        included = admin_api.get(URL, {"include_inactive": "true"}).json()["data"]
        assert len(included) == 1


class TestStockEndpoints:
    def test_add_stock(self, admin_api, product_factory):
        product = product_factory(stock=1)
        response = admin_api.patch(
            _detail(product, "add-stock/"), {"quantity": 4}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 5

    def test_remove_stock_insufficient(self, admin_api, product_factory):
        product = product_factory(name="Cable", stock=1)
        response = admin_api.patch(
            _detail(product, "remove-stock/"), {"quantity": 2}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Insufficient stock for Cable. Available: 1"
        )
        assert Product.objects.get(pk=product.pk).stock == 1

    def test_zero_quantity_rejected(self, admin_api, product_factory):
        product = product_factory(stock=1)
        response = admin_api.patch(
            _detail(product, "add-stock/"), {"quantity": 0}, format="json"
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("suffix", ["add-stock/", "remove-stock/"])
    def test_oversized_quantity_is_validation_error(
        self, admin_api, product_factory, suffix
    ):
        product = product_factory(stock=1)
        response = admin_api.patch(
            _detail(product, suffix), {"quantity": 2**63}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert Product.objects.get(pk=product.pk).stock == 1

    def test_add_stock_past_limit_is_400(self, admin_api, product_factory):
        product = product_factory(name="Nut", stock=2_147_483_000)
        response = admin_api.patch(
            _detail(product, "add-stock/"), {"quantity": 1000}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Stock limit exceeded for Nut. Current stock: 2147483000"
        )
