"""Value objects flowing through a single quote computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from studio_pricing.models.pricing import (
    Discount,
    FixedDiscount,
    PercentageDiscount,
    PricingRule,
    RateBand,
)


@dataclass(slots=True, frozen=True)
class HeadcountChange:
    """Point-in-time change of occupancy."""

    time: datetime
    new_headcount: int


@dataclass(slots=True, frozen=True)
class TimeSlot:
    """Contiguous billable unit with one band and one headcount."""

    start: datetime
    end: datetime
    band: RateBand
    headcount: int


@dataclass(slots=True)
class GroupedUnit:
    """Slots sharing a band and headcount, counted as units."""

    band: RateBand
    headcount: int
    unit_count: int = 0


@dataclass(slots=True, frozen=True)
class QuoteInput:
    """Everything needed to price one reservation."""

    start_time: datetime
    end_time: datetime
    initial_headcount: int
    headcount_changes: Sequence[HeadcountChange] = ()
    discount: Discount | None = None
    rate_table: Sequence[PricingRule] | None = None


@dataclass(slots=True, frozen=True)
class PricingDetail:
    """Aggregated, priced line item."""

    band: RateBand
    unit_count: int
    headcount: int
    price_per_unit: int
    subtotal: int

    @property
    def description(self) -> str:
        noun = "person" if self.headcount == 1 else "people"
        return f"{self.band.value.title()} rate, {self.headcount} {noun}"


@dataclass(slots=True, frozen=True)
class QuoteResult:
    """Itemized price breakdown for a reservation."""

    start_time: datetime
    end_time: datetime
    total_minutes: int
    details: list[PricingDetail] = field(default_factory=list)
    subtotal: int = 0
    discount_amount: int = 0
    total: int = 0
    applied_discount: Discount | None = None

    def to_line_items(self) -> list[dict[str, Any]]:
        """Render the quote as invoice line items; discounts become a negative line."""
        items: list[dict[str, Any]] = [
            {
                "description": detail.description,
                "quantity": detail.unit_count,
                "unit_price": detail.price_per_unit,
                "amount": detail.subtotal,
            }
            for detail in self.details
        ]
        if self.discount_amount:
            items.append(
                {
                    "description": _discount_description(self.applied_discount),
                    "quantity": 1,
                    "unit_price": -self.discount_amount,
                    "amount": -self.discount_amount,
                }
            )
        return items


def _discount_description(discount: Discount | None) -> str:
    match discount:
        case PercentageDiscount(value=value):
            return f"Discount ({value.normalize():f}%)"
        case FixedDiscount():
            return "Discount (fixed amount)"
        case _:
            return "Discount"
