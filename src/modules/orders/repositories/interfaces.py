"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: creation with lines, a row lock for lifecycle changes, and line
replacement for order updates.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    Line dicts carry ``product_id``, ``quantity``, ``unit_price`` and
    ``subtotal``; prices are computed by the service, never here.
    """

    @abstractmethod
    def create(
        self, owner_id: Any, total: Decimal, lines: List[Dict[str, Any]]
    ) -> Order:
        """Insert a PENDING order and its lines."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with owner, lines and products loaded."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with its row locked (``SELECT ... FOR UPDATE``)."""

    @abstractmethod
    def replace_lines(self, order: Order, lines: List[Dict[str, Any]]) -> None:
        """Delete every line of *order* and insert *lines*."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """Queryset of orders, newest first, with optional look-ups."""
