"""Unit tests for the invoice projection."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.invoices import to_invoice
from modules.orders.models import Order

pytestmark = pytest.mark.unit


class TestToInvoice:
    def test_projects_header_owner_and_lines(
        self, client_user, product_factory, order_factory
    ):
        mouse = product_factory(name="Mouse", price="25.50")
        pad = product_factory(name="Pad", price="4.99")
        order = order_factory(client_user, lines=[(mouse, 2), (pad, 1)])

        invoice = to_invoice(order)

        assert invoice.id == order.id
        assert invoice.order_date == order.created_at
        assert invoice.status == "PENDING"
        assert invoice.total == Decimal("55.99")
        assert invoice.user.id == client_user.id
        assert invoice.user.email == "client@example.com"
        assert [item.product_name for item in invoice.items] == ["Mouse", "Pad"]
        assert invoice.items[0].unit_price == Decimal("25.50")
        assert invoice.items[0].subtotal == Decimal("51.00")

    def test_total_equals_sum_of_subtotals(self, client_user, order_factory):
        invoice = to_invoice(order_factory(client_user))
        assert invoice.total == sum(item.subtotal for item in invoice.items)

    def test_missing_owner_renders_as_none(self, client_user, order_factory):
        order = order_factory(client_user)
        detached = Order.objects.get(pk=order.pk)
        detached.owner_id = None

        invoice = to_invoice(detached)

        assert invoice.user is None
        assert len(invoice.items) == 1

    def test_dump_is_json_ready(self, client_user, order_factory):
        data = to_invoice(order_factory(client_user)).model_dump(mode="json")
        assert set(data) == {"id", "order_date", "status", "total", "user", "items"}
        assert set(data["items"][0]) == {
            "id",
            "product_id",
            "product_name",
            "quantity",
            "unit_price",
            "subtotal",
        }
