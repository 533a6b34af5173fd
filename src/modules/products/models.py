"""Product model with lot-code uniqueness and stock control.

Business rules implemented:
- Lot code is unique (DB UNIQUE index); generated as ``LOT-####`` when absent.
- Price must be greater than zero.
- Stock can never be negative (DB CHECK constraint backs the service check)
  and never exceeds ``constants.MAX_STOCK``.
- Soft delete via ``is_active``: products referenced by order lines are
  never physically removed.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel

LOT_CODE_PREFIX = "LOT-"


class Product(BaseModel):
    """Catalog row.

    ``stock`` is the only hot shared mutable value in the system.  Write
    it exclusively through the repository's ``increase_stock`` /
    ``decrease_stock`` operations inside the caller's transaction.
    """

    lot_code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    entry_date = models.DateField(default=timezone.localdate)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="products_name_idx"),
            models.Index(fields=["entry_date"], name="products_entry_date_idx"),
            models.Index(fields=["is_active"], name="products_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def __str__(self) -> str:
        return f"{self.lot_code} - {self.name}"
