"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern (``None`` for missing rows);
the stock operations raise the product domain errors because the
check-and-write must happen under the same row lock.

Stock writes use ``F()`` expressions on a row already locked with
``SELECT ... FOR UPDATE`` so concurrent orders serialise on the product
row instead of overwriting each other.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Iterable, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, models, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
    StockLimitExceeded,
)
from modules.products.constants import MAX_STOCK
from modules.products.models import LOT_CODE_PREFIX, Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def format_lot_code(number: int) -> str:
    return f"{LOT_CODE_PREFIX}{number:04d}"


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Product]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def lock_many(self, ids: Iterable[Any]) -> Dict[str, Product]:
        unique_ids = sorted({str(i) for i in ids})
        if not unique_ids:
            return {}
        try:
            rows = (
                Product.objects.select_for_update()
                .filter(id__in=unique_ids)
                .order_by("id")
            )
            return {str(p.id): p for p in rows}
        except (ValueError, ValidationError):
            return {}

    def get_by_lot_code(self, lot_code: str) -> Optional[Product]:
        return Product.objects.filter(lot_code=lot_code.strip()).first()

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"is_active": True}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def count(self) -> int:
        return Product.objects.count()

    # ------------------------------------------------------------------
    # Save / Delete
    # ------------------------------------------------------------------

    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            lot_code=entity.lot_code,
        )
        return entity

    def delete(self, id: str) -> bool:
        """Soft-delete: flag the product inactive, keep the row."""
        product = self.get_by_id(id)
        if not product:
            return False
        product.is_active = False
        product.save(update_fields=["is_active"])
        logger.info("product.soft_deleted", product_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Stock contract
    # ------------------------------------------------------------------

    def check_available(self, id: str, quantity: int) -> bool:
        product = self.get_by_id(id)
        if not product:
            return False
        return product.is_active and product.has_stock(quantity)

    def decrease_stock(self, id: str, quantity: int) -> Product:
        """Subtract *quantity* from the locked row.

        Raises:
            InvalidQuantity: quantity below 1.
            ProductNotFound: no such product.
            InsufficientStock: ``stock < quantity``; nothing is written.
        """
        if quantity < 1:
            raise InvalidQuantity()
        product = self.get_for_update(id)
        if not product:
            raise ProductNotFound(f"Product with ID {id} not found.")
        if not product.has_stock(quantity):
            raise InsufficientStock(product.name, product.stock)

        Product.objects.filter(pk=product.pk).update(
            stock=F("stock") - quantity, updated_at=timezone.now()
        )
        product.refresh_from_db(fields=["stock", "updated_at"])
        logger.info(
            "product.stock_decreased",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    def increase_stock(self, id: str, quantity: int) -> Product:
        """Add *quantity* to the locked row.

        Raises:
            InvalidQuantity: quantity below 1.
            ProductNotFound: no such product.
            StockLimitExceeded: the new stock would exceed ``MAX_STOCK``.
        """
        if quantity < 1:
            raise InvalidQuantity()
        product = self.get_for_update(id)
        if not product:
            raise ProductNotFound(f"Product with ID {id} not found.")
        if quantity > MAX_STOCK - product.stock:
            raise StockLimitExceeded(product.name, product.stock)

        Product.objects.filter(pk=product.pk).update(
            stock=F("stock") + quantity, updated_at=timezone.now()
        )
        product.refresh_from_db(fields=["stock", "updated_at"])
        logger.info(
            "product.stock_increased",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    # ------------------------------------------------------------------
    # Lot codes
    # ------------------------------------------------------------------

    def generate_lot_code(self) -> str:
        """``LOT-`` + (product count + 1), zero-padded to 4 digits.

        Falls back to a random 1-9999 number when counting fails.  Two
        concurrent creations may compute the same code; the UNIQUE index
        on ``lot_code`` rejects the loser at insert time.
        """
        try:
            with transaction.atomic():
                next_number = self.count() + 1
        except DatabaseError as exc:
            next_number = random.randint(1, 9999)
            logger.warning(
                "product.lot_code_fallback",
                error=str(exc),
                lot_code=format_lot_code(next_number),
            )
        return format_lot_code(next_number)
