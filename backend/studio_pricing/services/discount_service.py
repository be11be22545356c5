"""Discount application with floor rounding."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import assert_never

from studio_pricing.models import Discount, FixedDiscount, PercentageDiscount

_HUNDRED = Decimal("100")


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def apply_discount(subtotal: int, discount: Discount | None) -> tuple[int, int]:
    """Return ``(discount_amount, total)`` for an already validated discount.

    Amounts are floored so rounding never raises the price, and a fixed
    discount larger than the subtotal is clamped to it.
    """
    if discount is None:
        return 0, subtotal

    match discount:
        case PercentageDiscount(value=percent):
            amount = _floor(Decimal(subtotal) * percent / _HUNDRED)
        case FixedDiscount(value=value):
            amount = min(_floor(Decimal(value)), subtotal)
        case _:
            assert_never(discount)

    amount = max(0, min(amount, subtotal))
    return amount, subtotal - amount
