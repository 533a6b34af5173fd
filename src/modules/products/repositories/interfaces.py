"""Product repository interface.

Extends ``IRepository[Product]`` with the stock contract the order
lifecycle depends on and the look-ups required by lot-code uniqueness.
All mutations run inside the caller's transaction.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def get_by_lot_code(self, lot_code: str) -> Optional[Product]:
        """Retrieve a product by lot code."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def lock_many(self, ids: Iterable[Any]) -> Dict[str, Product]:
        """Lock several product rows in primary-key order.

        Returns a mapping of ``str(id)`` to product; missing IDs are absent.
        """

    @abstractmethod
    def count(self) -> int:
        """Number of product rows (active or not)."""

    @abstractmethod
    def check_available(self, id: str, quantity: int) -> bool:
        """``True`` iff the product is active and ``stock >= quantity``."""

    @abstractmethod
    def decrease_stock(self, id: str, quantity: int) -> Product:
        """Atomically subtract *quantity*; raise ``InsufficientStock`` if short."""

    @abstractmethod
    def increase_stock(self, id: str, quantity: int) -> Product:
        """Atomically add *quantity* (no upper bound)."""

    @abstractmethod
    def generate_lot_code(self) -> str:
        """Next ``LOT-####`` code; uniqueness is NOT guaranteed."""
