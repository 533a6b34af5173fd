"""Integration tests for the Order endpoints.

Covers the full lifecycle over HTTP: create (CLIENT), read/list with
ownership scoping, update, cancel, complete (ADMIN) and history.
"""

from __future__ import annotations

import uuid

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


def _detail(order_id, suffix=""):
    return f"{URL}{order_id}/{suffix}"


def _payload(*pairs):
    return {
        "items": [
            {"product_id": str(product.id), "quantity": quantity}
            for product, quantity in pairs
        ]
    }


@pytest.fixture()
def placed_order(client_api, product_factory):
    """An order placed by ``client_user`` for 2 units out of 10."""
    product = product_factory(name="Monitor", price="100.00", stock=10)
    response = client_api.post(URL, _payload((product, 2)), format="json")
    assert response.status_code == 201
    return response.json()["data"], product


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_returns_invoice(self, client_api, client_user, product_factory):
        a = product_factory(name="Mouse", price="25.50", stock=10)
        b = product_factory(name="Pad", price="4.99", stock=10)

        response = client_api.post(URL, _payload((a, 2), (b, 1)), format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        invoice = body["data"]
        assert invoice["status"] == OrderStatus.PENDING
        assert invoice["total"] == 55.99
        assert invoice["user"]["email"] == client_user.email
        assert [item["product_name"] for item in invoice["items"]] == ["Mouse", "Pad"]
        assert invoice["items"][0]["subtotal"] == 51.0

    def test_admin_cannot_place_orders(self, admin_api, product_factory):
        product = product_factory()
        response = admin_api.post(URL, _payload((product, 1)), format="json")
        assert response.status_code == 403

    def test_anonymous_rejected(self, api_client, product_factory):
        product = product_factory()
        response = api_client.post(URL, _payload((product, 1)), format="json")
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"items": []},
            {"items": [{"product_id": "not-a-uuid", "quantity": 1}]},
            {"items": [{"product_id": str(uuid.uuid4()), "quantity": 0}]},
            {"items": [{"product_id": str(uuid.uuid4()), "quantity": 2**63}]},
        ],
    )
    def test_invalid_payload(self, client_api, payload):
        response = client_api.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_unknown_product_is_404(self, client_api):
        response = client_api.post(
            URL,
            {"items": [{"product_id": str(uuid.uuid4()), "quantity": 1}]},
            format="json",
        )
        assert response.status_code == 404

    def test_insufficient_stock_is_400_and_nothing_changes(
        self, client_api, product_factory
    ):
        plenty = product_factory(stock=10)
        scarce = product_factory(name="Rare", stock=1)

        response = client_api.post(
            URL, _payload((plenty, 3), (scarce, 2)), format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Insufficient stock for Rare. Available: 1"
        )
        plenty.refresh_from_db()
        assert plenty.stock == 10
        assert Order.objects.count() == 0

    def test_total_beyond_money_capacity_is_400(self, client_api, product_factory):
        product = product_factory(price="60000000.00", stock=5)

        response = client_api.post(URL, _payload((product, 2)), format="json")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["message"] == "Order total exceeds the maximum allowed amount."
        product.refresh_from_db()
        assert product.stock == 5
        assert Order.objects.count() == 0


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


class TestRead:
    def test_owner_can_retrieve(self, client_api, placed_order):
        invoice, _ = placed_order
        response = client_api.get(_detail(invoice["id"]))
        assert response.status_code == 200
        assert response.json()["data"]["id"] == invoice["id"]

    def test_other_client_forbidden(self, other_client_api, placed_order):
        invoice, _ = placed_order
        response = other_client_api.get(_detail(invoice["id"]))
        assert response.status_code == 403

    def test_admin_can_retrieve(self, admin_api, placed_order):
        invoice, _ = placed_order
        assert admin_api.get(_detail(invoice["id"])).status_code == 200

    def test_unknown_order_is_404(self, client_api):
        response = client_api.get(_detail(uuid.uuid4()))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_list_scoped_to_owner(
        self, client_api, other_client_api, admin_api, placed_order
    ):
        assert len(client_api.get(URL).json()["data"]) == 1
        assert other_client_api.get(URL).json()["data"] == []
        assert len(admin_api.get(URL).json()["data"]) == 1

    def test_admin_filters_by_user_and_status(
        self, admin_api, client_user, other_client, placed_order
    ):
        by_owner = admin_api.get(URL, {"user": str(client_user.id)}).json()["data"]
        assert len(by_owner) == 1
        by_other = admin_api.get(URL, {"user": str(other_client.id)}).json()["data"]
        assert by_other == []
        completed = admin_api.get(URL, {"status": "COMPLETED"}).json()["data"]
        assert completed == []

    def test_list_includes_pagination_meta(self, client_api, placed_order):
        body = client_api.get(URL).json()
        assert body["meta"]["pagination"]["total"] == 1

    def test_history_for_client(self, client_api, placed_order):
        response = client_api.get(f"{URL}history/")
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    def test_history_not_for_admin(self, admin_api):
        assert admin_api.get(f"{URL}history/").status_code == 403


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_update_replaces_lines(self, client_api, placed_order, product_factory):
        invoice, monitor = placed_order
        cable = product_factory(name="Cable", price="5.00", stock=3)

        response = client_api.put(
            _detail(invoice["id"]), _payload((cable, 3)), format="json"
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 15.0
        assert [item["product_name"] for item in data["items"]] == ["Cable"]
        monitor.refresh_from_db()
        cable.refresh_from_db()
        assert monitor.stock == 10
        assert cable.stock == 0

    def test_cancel_returns_stock(self, client_api, placed_order):
        invoice, monitor = placed_order
        response = client_api.patch(_detail(invoice["id"], "cancel/"))
        assert response.status_code == 200
        assert response.json()["data"]["status"] == OrderStatus.CANCELLED
        monitor.refresh_from_db()
        assert monitor.stock == 10

    def test_cancel_twice_is_400(self, client_api, placed_order):
        invoice, _ = placed_order
        client_api.patch(_detail(invoice["id"], "cancel/"))
        response = client_api.patch(_detail(invoice["id"], "cancel/"))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Cannot cancel an order with status CANCELLED"
        )

    def test_other_client_cannot_cancel(self, other_client_api, placed_order):
        invoice, monitor = placed_order
        response = other_client_api.patch(_detail(invoice["id"], "cancel/"))
        assert response.status_code == 403
        monitor.refresh_from_db()
        assert monitor.stock == 8

    def test_admin_completes(self, admin_api, placed_order):
        invoice, monitor = placed_order
        response = admin_api.patch(_detail(invoice["id"], "complete/"))
        assert response.status_code == 200
        assert response.json()["data"]["status"] == OrderStatus.COMPLETED
        monitor.refresh_from_db()
        assert monitor.stock == 8

    def test_client_cannot_complete(self, client_api, placed_order):
        invoice, _ = placed_order
        response = client_api.patch(_detail(invoice["id"], "complete/"))
        assert response.status_code == 403

    def test_completed_order_is_frozen(
        self, admin_api, client_api, placed_order, product_factory
    ):
        invoice, _ = placed_order
        admin_api.patch(_detail(invoice["id"], "complete/"))

        update = client_api.put(
            _detail(invoice["id"]), _payload((product_factory(), 1)), format="json"
        )
        cancel = client_api.patch(_detail(invoice["id"], "cancel/"))

        assert update.status_code == 400
        assert update.json()["error"]["message"] == (
            "Cannot modify an order with status COMPLETED"
        )
        assert cancel.status_code == 400
