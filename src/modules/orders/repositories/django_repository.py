"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Writes run
inside the caller's transaction: ``OrderService`` owns the atomic
boundary so that stock movements and order rows commit together.

Concurrency control on lifecycle changes uses ``select_for_update()``
on the order row; there is no ``version`` column.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _base_queryset(self) -> "models.QuerySet[Order]":
        return Order.objects.select_related("owner").prefetch_related(
            "lines__product"
        )

    # ------------------------------------------------------------------
    # Create / Lines
    # ------------------------------------------------------------------

    def _insert_lines(self, order: Order, lines: List[Dict[str, Any]]) -> None:
        for line in lines:
            OrderLine(
                order=order,
                product_id=line["product_id"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                subtotal=line["subtotal"],
            ).save()

    def create(
        self, owner_id: Any, total: Decimal, lines: List[Dict[str, Any]]
    ) -> Order:
        order = Order(owner_id=owner_id, total=total, status=OrderStatus.PENDING)
        order.save()
        self._insert_lines(order, lines)

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            line_count=len(lines),
            total=str(total),
        )
        return order

    def replace_lines(self, order: Order, lines: List[Dict[str, Any]]) -> None:
        deleted, _ = OrderLine.objects.filter(order=order).delete()
        self._insert_lines(order, lines)
        logger.info(
            "order.lines_replaced",
            order_id=str(order.id),
            removed=deleted,
            added=len(lines),
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        try:
            return (
                Order.objects.select_for_update()
                .prefetch_related("lines")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional Django ORM look-ups.

        Examples of valid filters::

            {"owner_id": user.id}
            {"status": "PENDING"}
        """
        queryset = self._base_queryset().order_by("-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Save / Delete
    # ------------------------------------------------------------------

    def save(self, entity: Order) -> Order:
        entity.save()
        return entity

    def delete(self, id: str) -> bool:
        """Hard delete; lines go with the order (CASCADE)."""
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("order.deleted", order_id=str(id))
        return True
