"""Fixed-point money primitives.

All monetary arithmetic goes through ``Decimal`` quantized to cents.
Binary floats are rejected on input so stored totals always match the
sum of their line subtotals.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest amount a DecimalField(max_digits=10, decimal_places=2) column holds.
MAX_AMOUNT = Decimal("99999999.99")

MoneyLike = Union[Decimal, int, str]


def to_money(value: MoneyLike) -> Decimal:
    """Convert *value* to a 2-place ``Decimal`` (ROUND_HALF_UP).

    Raises:
        TypeError: for ``float`` or other non-exact inputs.
        ValueError: for strings that are not decimal numbers.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError("Money values must be Decimal, int or str, not float.")
    if not isinstance(value, (Decimal, int, str)):
        raise TypeError(f"Unsupported money type: {type(value).__name__}.")
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid money value: {value!r}.") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid money value: {value!r}.")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(unit_price: MoneyLike, quantity: int) -> Decimal:
    """Return ``unit_price * quantity`` in cents."""
    return to_money(to_money(unit_price) * quantity)


def sum_money(values: Iterable[MoneyLike]) -> Decimal:
    total = ZERO
    for value in values:
        total += to_money(value)
    return to_money(total)


def fits_column(amount: Decimal) -> bool:
    """True when *amount* can be stored in a money column."""
    return amount <= MAX_AMOUNT
