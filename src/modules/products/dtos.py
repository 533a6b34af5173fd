"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``StockAdjustmentDTO``: input for add/remove stock.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.constants import MAX_STOCK
from shared.domain.money import to_money


def _validate_price(v: Decimal) -> Decimal:
    if v <= 0:
        raise ValueError("Price must be greater than zero.")
    if v != to_money(v):
        raise ValueError("Price must have at most 2 decimal places.")
    return to_money(v)


def _validate_lot_code(v: str) -> str:
    v = v.strip()
    if not 3 <= len(v) <= 50:
        raise ValueError("Lot code must have between 3 and 50 characters.")
    return v


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``lot_code`` is optional; the service generates one when omitted.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    stock: int = 0
    lot_code: Optional[str] = None
    description: str = ""
    entry_date: Optional[date] = None

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _validate_price(v)

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        if v > MAX_STOCK:
            raise ValueError(f"Stock cannot exceed {MAX_STOCK}.")
        return v

    @field_validator("lot_code")
    @classmethod
    def lot_code_length(cls, v: Optional[str]) -> Optional[str]:
        return _validate_lot_code(v) if v is not None else None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateProductDTO(BaseModel):
    """All fields optional; only supplied fields are updated.

    Stock is absent: it only moves through the stock
    operations.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = None
    lot_code: Optional[str] = None
    description: Optional[str] = None
    entry_date: Optional[date] = None
    is_active: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _validate_price(v) if v is not None else None

    @field_validator("lot_code")
    @classmethod
    def lot_code_length(cls, v: Optional[str]) -> Optional[str]:
        return _validate_lot_code(v) if v is not None else None


class StockAdjustmentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        if v > MAX_STOCK:
            raise ValueError(f"Quantity cannot exceed {MAX_STOCK}.")
        return v

