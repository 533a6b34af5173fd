from decimal import Decimal

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture()
def service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


@pytest.fixture()
def order_factory(product_factory):
    """Persist an order row directly, bypassing stock reservation."""

    def _make(owner, status=OrderStatus.PENDING, lines=None):
        lines = lines or [(product_factory(), 1)]
        order = Order.objects.create(owner=owner, status=status, total=Decimal("0.00"))
        total = Decimal("0.00")
        for product, quantity in lines:
            subtotal = product.price * quantity
            OrderLine.objects.create(
                order=order,
                product=product,
                quantity=quantity,
                unit_price=product.price,
                subtotal=subtotal,
            )
            total += subtotal
        order.total = total
        order.save(update_fields=["total"])
        return order

    return _make
