"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
Product-level failures (missing, inactive, insufficient stock) reuse
``modules.products.exceptions``.
"""

from __future__ import annotations

from modules.core.exceptions import BadRequestError, ForbiddenError, NotFoundError


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    default_message = "Order not found."


class InvalidOrderStatus(BadRequestError):
    """The order is not in a status that allows the requested change."""


class OrderAccessDenied(ForbiddenError):
    """The caller may not view or change this order."""


class OrderTotalTooLarge(BadRequestError):
    """A line subtotal or the order total exceeds the storable amount."""

    default_message = "Order total exceeds the maximum allowed amount."
