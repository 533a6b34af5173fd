"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``OrderLineRequestDTO``: one requested line (product + quantity).
- ``PlaceOrderDTO``: the full line list for create and update.
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.constants import MAX_STOCK


class OrderLineRequestDTO(BaseModel):
    """Immutable DTO for a single requested order line.

    The caller sends ``product_id`` and ``quantity``.  The unit price is
    resolved by the Service Layer from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        if v > MAX_STOCK:
            raise ValueError(f"Quantity cannot exceed {MAX_STOCK}.")
        return v


class PlaceOrderDTO(BaseModel):
    """Line list for ``create_order`` and ``update_order``.

    The same product may appear more than once; each line is reserved
    against the stock left by the lines before it.
    """

    model_config = ConfigDict(frozen=True)

    items: List[OrderLineRequestDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[OrderLineRequestDTO]
    ) -> List[OrderLineRequestDTO]:
        if not v:
            raise ValueError("Order must contain at least one item.")
        return v
