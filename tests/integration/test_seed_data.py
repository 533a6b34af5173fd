"""Integration test for the ``seed_data`` management command."""

import pytest
from django.core.management import call_command

from modules.orders.models import Order
from modules.products.models import Product
from modules.users.models import Role, User

pytestmark = pytest.mark.integration


class TestSeedData:
    def test_seeds_users_products_and_orders(self):
        call_command("seed_data", orders=5)

        assert User.objects.get(email="admin@inventory.com").role == Role.ADMIN
        assert User.objects.get(email="cliente@inventory.com").role == Role.CLIENT
        assert Product.objects.filter(lot_code__startswith="LOT-").count() == 12
        assert Order.objects.count() == 5
        for order in Order.objects.prefetch_related("lines"):
            assert order.total == sum(line.subtotal for line in order.lines.all())

    def test_is_idempotent(self):
        call_command("seed_data", orders=3)
        call_command("seed_data", orders=3)

        assert User.objects.filter(email="admin@inventory.com").count() == 1
        assert Product.objects.count() == 12
        assert Order.objects.count() == 3
