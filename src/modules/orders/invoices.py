"""Invoice projection of an order.

``to_invoice`` turns a persisted ``Order`` (with its lines, products and
owner) into the read model returned by every order endpoint.  A missing
owner or product renders as ``None`` instead of failing the request.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional
from uuid import UUID

from django.core.exceptions import ObjectDoesNotExist
from pydantic import BaseModel, ConfigDict

from shared.domain.money import to_money

if TYPE_CHECKING:
    from modules.orders.models import Order


class InvoiceOwnerDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    email: str


class InvoiceLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    product_id: UUID
    product_name: Optional[str]
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class InvoiceDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    order_date: datetime
    status: str
    total: Decimal
    user: Optional[InvoiceOwnerDTO]
    items: List[InvoiceLineDTO]


def _related(instance: Any, name: str) -> Any:
    try:
        return getattr(instance, name)
    except ObjectDoesNotExist:
        return None


def to_invoice(order: Order) -> InvoiceDTO:
    owner = _related(order, "owner")
    items = []
    for line in order.lines.all():
        product = _related(line, "product")
        items.append(
            InvoiceLineDTO(
                id=line.id,
                product_id=line.product_id,
                product_name=product.name if product is not None else None,
                quantity=line.quantity,
                unit_price=to_money(line.unit_price),
                subtotal=to_money(line.subtotal),
            )
        )

    return InvoiceDTO(
        id=order.id,
        order_date=order.created_at,
        status=str(order.status),
        total=to_money(order.total),
        user=(
            InvoiceOwnerDTO(id=owner.id, name=owner.name, email=owner.email)
            if owner is not None
            else None
        ),
        items=items,
    )
