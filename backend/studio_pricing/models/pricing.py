"""Rate bands, rate-table rows and discount variants."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, TypeAlias


class RateBand(str, enum.Enum):
    """Time-of-day classification selecting a rate row."""

    DAY = "DAY"
    NIGHT = "NIGHT"


class DiscountKind(str, enum.Enum):
    """Kinds of discounts supported by the pricing engine."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(slots=True, frozen=True)
class PricingRule:
    """One rate-table row: price per billable unit for a band and headcount."""

    band: RateBand
    headcount: int
    price_per_unit: int


@dataclass(slots=True, frozen=True)
class PercentageDiscount:
    """Discount expressed as a percentage (0-100) of the subtotal."""

    kind: ClassVar[DiscountKind] = DiscountKind.PERCENTAGE

    value: Decimal

    def __post_init__(self) -> None:
        # floats go through str() so 33.33 stays 33.33
        if isinstance(self.value, (int, float)) and not isinstance(self.value, bool):
            object.__setattr__(self, "value", Decimal(str(self.value)))


@dataclass(slots=True, frozen=True)
class FixedDiscount:
    """Discount expressed as a fixed amount of minor currency units."""

    kind: ClassVar[DiscountKind] = DiscountKind.FIXED

    value: int


Discount: TypeAlias = PercentageDiscount | FixedDiscount
