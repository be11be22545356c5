"""Schema exports."""

from studio_pricing.schemas.quote import (
    DiscountIn,
    DiscountRead,
    HeadcountChangeIn,
    PricingDetailRead,
    PricingRuleIn,
    QuoteRead,
    QuoteRequest,
)

__all__ = [
    "DiscountIn",
    "DiscountRead",
    "HeadcountChangeIn",
    "PricingDetailRead",
    "PricingRuleIn",
    "QuoteRead",
    "QuoteRequest",
]
