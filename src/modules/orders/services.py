"""Order service layer (Use Cases).

Orchestrates the order lifecycle and the stock reservation it drives.
Every command is atomic: the service defines the unit-of-work boundary,
so an order row and the stock movements it caused commit or roll back
together.

Business rules enforced:
- Each requested product must exist and be active.
- Stock is reserved line by line against the stock left by earlier
  lines; a shortfall on any line aborts the whole request.
- Unit price is snapshotted from the product; subtotal and total are
  computed here, never accepted from the caller.
- Only PENDING orders can be updated, cancelled or completed.
- Cancelling or updating returns the reserved stock; completing keeps
  it consumed.
- A CLIENT may only touch their own orders; only ADMIN completes.

Product rows are locked in primary-key order before any line is
processed so concurrent orders over overlapping products cannot
deadlock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderNotFound,
    OrderTotalTooLarge,
)
from modules.orders.invoices import to_invoice
from modules.orders.policies import (
    ensure_can_complete,
    ensure_can_mutate,
    ensure_can_view,
)
from modules.products.exceptions import (
    InactiveProduct,
    InsufficientStock,
    ProductNotFound,
)
from modules.users.models import Role
from shared.domain.money import ZERO, fits_column, line_subtotal, sum_money, to_money

if TYPE_CHECKING:
    from decimal import Decimal

    from django.db import models

    from modules.orders.dtos import PlaceOrderDTO
    from modules.orders.invoices import InvoiceDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Stock helpers
    # ------------------------------------------------------------------

    def _reserve_lines(
        self, dto: PlaceOrderDTO, log: Any
    ) -> Tuple[Decimal, List[Dict[str, Any]]]:
        """Validate and reserve stock for every requested line.

        Returns the order total and the line dicts to persist.  Raises on
        the first failing line; the caller's transaction undoes any stock
        already taken for earlier lines.
        """
        locked = self._product_repo.lock_many(item.product_id for item in dto.items)
        lines: List[Dict[str, Any]] = []
        running_total = ZERO

        for item in dto.items:
            product = locked.get(str(item.product_id))
            if product is None:
                raise ProductNotFound(f"Product with ID {item.product_id} not found.")
            if not product.is_active:
                raise InactiveProduct(f"Product {product.name} is not available.")
            if not product.has_stock(item.quantity):
                raise InsufficientStock(product.name, product.stock)

            unit_price = to_money(product.price)
            subtotal = line_subtotal(unit_price, item.quantity)
            running_total += subtotal
            if not fits_column(running_total):
                raise OrderTotalTooLarge()

            product = self._product_repo.decrease_stock(product.id, item.quantity)
            locked[str(product.id)] = product

            lines.append(
                {
                    "product_id": product.id,
                    "quantity": item.quantity,
                    "unit_price": unit_price,
                    "subtotal": subtotal,
                }
            )
            log.info(
                "order.stock_reserved",
                product_id=str(product.id),
                quantity=item.quantity,
                remaining=product.stock,
            )

        total = sum_money(line["subtotal"] for line in lines)
        return total, lines

    def _release_lines(self, order: Order, log: Any) -> None:
        """Return the stock held by every line of *order*."""
        lines = list(order.lines.all())
        self._product_repo.lock_many(line.product_id for line in lines)
        for line in lines:
            self._product_repo.increase_stock(line.product_id, line.quantity)
            log.info(
                "order.stock_released",
                product_id=str(line.product_id),
                quantity=line.quantity,
            )

    def _load_for_update(self, order_id: str) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound()
        return order

    def _invoice(self, order_id: Any) -> InvoiceDTO:
        return to_invoice(self._order_repo.get_by_id(str(order_id)))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, owner_id: Any, dto: PlaceOrderDTO) -> InvoiceDTO:
        """Create a PENDING order, reserving stock for every line.

        Raises:
            ProductNotFound: a requested product does not exist.
            InactiveProduct: a requested product is inactive.
            InsufficientStock: a line asks for more than is left.
        """
        log = logger.bind(owner_id=str(owner_id), line_count=len(dto.items))

        total, lines = self._reserve_lines(dto, log)
        order = self._order_repo.create(owner_id, total, lines)

        log.info("order.created", order_id=str(order.id), total=str(total))
        return self._invoice(order.id)

    @transaction.atomic
    def update_order(
        self,
        order_id: str,
        caller_id: Any,
        caller_role: str,
        dto: PlaceOrderDTO,
    ) -> InvoiceDTO:
        """Replace the lines of a PENDING order.

        Stock held by the old lines is returned before the new lines are
        reserved, so the new lines may reuse it.

        Raises:
            OrderNotFound, OrderAccessDenied, InvalidOrderStatus, plus the
            product errors of ``create_order``.
        """
        order = self._load_for_update(order_id)
        ensure_can_mutate(order, caller_id, caller_role)
        if order.is_terminal:
            raise InvalidOrderStatus(
                f"Cannot modify an order with status {order.status}"
            )

        log = logger.bind(order_id=str(order.id), caller_id=str(caller_id))

        # Old and new products are locked together, in primary-key order,
        # before any stock moves.
        self._product_repo.lock_many(
            [line.product_id for line in order.lines.all()]
            + [item.product_id for item in dto.items]
        )
        self._release_lines(order, log)
        total, lines = self._reserve_lines(dto, log)
        self._order_repo.replace_lines(order, lines)

        order.total = total
        order.save(update_fields=["total"])

        log.info("order.updated", total=str(total), line_count=len(lines))
        return self._invoice(order.id)

    @transaction.atomic
    def cancel_order(
        self, order_id: str, caller_id: Any, caller_role: str
    ) -> InvoiceDTO:
        """Cancel a PENDING order and return its stock.

        Raises:
            OrderNotFound, OrderAccessDenied, InvalidOrderStatus.
        """
        order = self._load_for_update(order_id)
        ensure_can_mutate(order, caller_id, caller_role, action="cancel")
        if not order.can_transition_to(OrderStatus.CANCELLED):
            raise InvalidOrderStatus(
                f"Cannot cancel an order with status {order.status}"
            )

        log = logger.bind(order_id=str(order.id), caller_id=str(caller_id))

        self._release_lines(order, log)
        order.status = OrderStatus.CANCELLED
        order.save(update_fields=["status"])

        log.info("order.cancelled")
        return self._invoice(order.id)

    @transaction.atomic
    def complete_order(
        self, order_id: str, caller_id: Any, caller_role: str
    ) -> InvoiceDTO:
        """Mark a PENDING order COMPLETED; the reserved stock stays consumed.

        Raises:
            OrderAccessDenied: caller is not ADMIN.
            OrderNotFound, InvalidOrderStatus.
        """
        ensure_can_complete(caller_role)
        order = self._load_for_update(order_id)
        if not order.can_transition_to(OrderStatus.COMPLETED):
            raise InvalidOrderStatus(
                f"Cannot complete an order with status {order.status}"
            )

        order.status = OrderStatus.COMPLETED
        order.save(update_fields=["status"])

        logger.info(
            "order.completed", order_id=str(order.id), caller_id=str(caller_id)
        )
        return self._invoice(order.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str, caller_id: Any, caller_role: str) -> InvoiceDTO:
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()
        ensure_can_view(order, caller_id, caller_role)
        return to_invoice(order)

    def list_orders(
        self,
        caller_id: Any,
        caller_role: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> "models.QuerySet[Order]":
        """Orders visible to the caller: all for ADMIN, own for CLIENT."""
        lookups: Dict[str, Any] = dict(filters or {})
        if caller_role != Role.ADMIN:
            lookups["owner_id"] = caller_id
        return self._order_repo.list(lookups)

    def order_history(self, caller_id: Any) -> "models.QuerySet[Order]":
        """The caller's own orders, newest first."""
        return self._order_repo.list({"owner_id": caller_id})
