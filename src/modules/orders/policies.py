"""Order access policy.

Pure functions deciding whether a caller may act on an order.  An ADMIN
may see and change every order; a CLIENT only the orders they own.
Completing an order is reserved to ADMIN.

The ``ensure_*`` variants raise ``OrderAccessDenied`` instead of
returning ``False``; the service calls them after the order is loaded,
so an unknown order still reports ``OrderNotFound``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from modules.orders.exceptions import OrderAccessDenied
from modules.users.models import Role

if TYPE_CHECKING:
    from modules.orders.models import Order


def _is_owner(order: Order, caller_id: Any) -> bool:
    return order.owner_id is not None and str(order.owner_id) == str(caller_id)


def can_view(order: Order, caller_id: Any, caller_role: str) -> bool:
    if caller_role == Role.ADMIN:
        return True
    return caller_role == Role.CLIENT and _is_owner(order, caller_id)


def can_mutate(order: Order, caller_id: Any, caller_role: str) -> bool:
    return can_view(order, caller_id, caller_role)


def can_complete(caller_role: str) -> bool:
    return caller_role == Role.ADMIN


def ensure_can_view(order: Order, caller_id: Any, caller_role: str) -> None:
    if not can_view(order, caller_id, caller_role):
        raise OrderAccessDenied("You do not have permission to view this order.")


def ensure_can_mutate(
    order: Order, caller_id: Any, caller_role: str, action: str = "modify"
) -> None:
    if not can_mutate(order, caller_id, caller_role):
        raise OrderAccessDenied(f"You do not have permission to {action} this order.")


def ensure_can_complete(caller_role: str) -> None:
    if not can_complete(caller_role):
        raise OrderAccessDenied("Only administrators can complete orders.")
