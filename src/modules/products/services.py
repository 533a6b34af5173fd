"""Product service layer (Use Cases).

Orchestrates catalog management around the stock contract exposed by
``IProductRepository``.

Business rules enforced here:
- Lot code must be unique; a missing lot code is generated as ``LOT-####``.
  The DB UNIQUE index backs the generator; a violation at insert time
  surfaces as ``ProductAlreadyExists``.
- Soft delete flags the product inactive.
- Manual stock adjustments go through increase/decrease (never a direct
  field write), so the non-negative invariant holds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import IntegrityError, models, transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product, generating a lot code if absent.

        Raises:
            ProductAlreadyExists: lot code already taken (checked up front
                and again by the UNIQUE index on insert).
        """
        lot_code = dto.lot_code or self._repo.generate_lot_code()
        log = logger.bind(lot_code=lot_code)

        if self._repo.get_by_lot_code(lot_code):
            log.warning("product.duplicate_lot_code")
            raise ProductAlreadyExists(f"Lot code '{lot_code}' already exists.")

        fields = {
            "lot_code": lot_code,
            "name": dto.name,
            "price": dto.price,
            "stock": dto.stock,
            "description": dto.description,
        }
        if dto.entry_date is not None:
            fields["entry_date"] = dto.entry_date

        try:
            with transaction.atomic():
                product = self._repo.save(Product(**fields))
        except IntegrityError as exc:
            log.warning("product.lot_code_conflict_on_insert")
            raise ProductAlreadyExists(
                f"Lot code '{lot_code}' already exists."
            ) from exc

        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        Raises:
            ProductNotFound: the product does not exist.
            ProductAlreadyExists: the new lot code belongs to another product.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product with ID {id} not found.")

        log = logger.bind(product_id=str(id))

        if dto.lot_code is not None and dto.lot_code != product.lot_code:
            existing = self._repo.get_by_lot_code(dto.lot_code)
            if existing and existing.id != product.id:
                log.warning("product.duplicate_lot_code", lot_code=dto.lot_code)
                raise ProductAlreadyExists(
                    f"Lot code '{dto.lot_code}' already exists."
                )

        for field in ("lot_code", "name", "price", "description", "entry_date", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        try:
            with transaction.atomic():
                product = self._repo.save(product)
        except IntegrityError as exc:
            raise ProductAlreadyExists(
                f"Lot code '{product.lot_code}' already exists."
            ) from exc

        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Soft-delete a product.

        Raises:
            ProductNotFound: the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product with ID {id} not found.")
        logger.info("product.deactivated", product_id=str(id))

    @transaction.atomic
    def add_stock(self, id: str, quantity: int) -> Product:
        """Raises ``ProductNotFound`` / ``InvalidQuantity``."""
        product = self._repo.increase_stock(id, quantity)
        logger.info("product.stock_added", product_id=str(id), quantity=quantity)
        return product

    @transaction.atomic
    def remove_stock(self, id: str, quantity: int) -> Product:
        """Raises ``ProductNotFound`` / ``InsufficientStock`` / ``InvalidQuantity``."""
        product = self._repo.decrease_stock(id, quantity)
        logger.info("product.stock_removed", product_id=str(id), quantity=quantity)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, include_inactive: bool = False) -> "models.QuerySet[Product]":
        """Active products by default; ADMIN screens may ask for all."""
        if include_inactive:
            return self._repo.list()
        return self._repo.list({"is_active": True})

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product with ID {id} not found.")
        return product
