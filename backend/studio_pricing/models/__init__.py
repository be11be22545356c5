"""Domain model package export."""

from studio_pricing.models.pricing import (
    Discount,
    DiscountKind,
    FixedDiscount,
    PercentageDiscount,
    PricingRule,
    RateBand,
)
from studio_pricing.models.quote import (
    GroupedUnit,
    HeadcountChange,
    PricingDetail,
    QuoteInput,
    QuoteResult,
    TimeSlot,
)

__all__ = [
    "Discount",
    "DiscountKind",
    "FixedDiscount",
    "GroupedUnit",
    "HeadcountChange",
    "PercentageDiscount",
    "PricingDetail",
    "PricingRule",
    "QuoteInput",
    "QuoteResult",
    "RateBand",
    "TimeSlot",
]
