"""Product domain exceptions.

Raised by the repository (stock contract) and the Service Layer.  The
order lifecycle relies on the same classes when it validates lines.
"""

from __future__ import annotations

from modules.core.exceptions import BadRequestError, ConflictError, NotFoundError


class ProductAlreadyExists(ConflictError):
    """A product with the same lot code already exists."""

    default_message = "Lot code already exists."


class ProductNotFound(NotFoundError):
    """The requested product does not exist."""

    default_message = "Product not found."


class InactiveProduct(BadRequestError):
    """The product has been deactivated and cannot be sold."""


class InsufficientStock(BadRequestError):
    """Not enough stock to satisfy the requested quantity."""

    def __init__(self, product_name: str, available: int) -> None:
        self.product_name = product_name
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}"
        )


class InvalidQuantity(BadRequestError):
    default_message = "Quantity must be at least 1."


class StockLimitExceeded(BadRequestError):
    """Adding the quantity would push stock past the storable maximum."""

    def __init__(self, product_name: str, available: int) -> None:
        self.product_name = product_name
        self.available = available
        super().__init__(
            f"Stock limit exceeded for {product_name}. Current stock: {available}"
        )
