"""Quote request and response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from studio_pricing.models import (
    Discount,
    DiscountKind,
    FixedDiscount,
    HeadcountChange,
    PercentageDiscount,
    PricingRule,
    QuoteInput,
    QuoteResult,
    RateBand,
)

# booking-channel payloads call these "rate" and "amount"
_DISCOUNT_TYPE_ALIASES = {"rate": "percentage", "amount": "fixed"}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeadcountChangeIn(_CamelModel):
    """Point-in-time headcount change."""

    time: datetime
    new_headcount: int

    def to_domain(self) -> HeadcountChange:
        return HeadcountChange(time=self.time, new_headcount=self.new_headcount)


class DiscountIn(_CamelModel):
    """Discount payload: percentage of subtotal or fixed amount."""

    type: DiscountKind
    value: Decimal

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _DISCOUNT_TYPE_ALIASES.get(lowered, lowered)
        return value

    def to_domain(self) -> Discount:
        if self.type is DiscountKind.PERCENTAGE:
            return PercentageDiscount(value=self.value)
        if self.value.is_finite() and self.value == self.value.to_integral_value():
            return FixedDiscount(value=int(self.value))
        return FixedDiscount(value=self.value)  # type: ignore[arg-type]


class PricingRuleIn(_CamelModel):
    """Rate-table override row."""

    band: RateBand
    headcount: int
    price_per_unit: int


class QuoteRequest(_CamelModel):
    """Input payload for generating a reservation quote."""

    start_time: datetime
    end_time: datetime
    initial_headcount: int
    headcount_changes: list[HeadcountChangeIn] | None = None
    discount: DiscountIn | None = None
    rate_table: list[PricingRuleIn] | None = None
    channel: str | None = None

    def to_quote_input(self) -> QuoteInput:
        """Build the engine input from the parsed payload."""
        rate_table = None
        if self.rate_table is not None:
            rate_table = [
                PricingRule(
                    band=row.band,
                    headcount=row.headcount,
                    price_per_unit=row.price_per_unit,
                )
                for row in self.rate_table
            ]
        return QuoteInput(
            start_time=self.start_time,
            end_time=self.end_time,
            initial_headcount=self.initial_headcount,
            headcount_changes=tuple(
                change.to_domain() for change in self.headcount_changes or ()
            ),
            discount=self.discount.to_domain() if self.discount else None,
            rate_table=rate_table,
        )


class PricingDetailRead(_CamelModel):
    """Individual line item within a quote."""

    band: RateBand
    unit_count: int
    headcount: int
    price_per_unit: int
    subtotal: int

    model_config = ConfigDict(from_attributes=True)


class DiscountRead(_CamelModel):
    """Echo of the discount that was applied."""

    type: DiscountKind
    value: Decimal

    @field_serializer("value", when_used="json")
    def _value_as_number(self, value: Decimal) -> int | float:
        if value == value.to_integral_value():
            return int(value)
        return float(value)


class QuoteRead(_CamelModel):
    """Aggregated quote response."""

    start_time: datetime
    end_time: datetime
    total_minutes: int
    details: list[PricingDetailRead]
    subtotal: int
    discount_amount: int
    total: int
    applied_discount: DiscountRead | None = None

    @classmethod
    def from_result(cls, result: QuoteResult) -> "QuoteRead":
        applied = None
        if result.applied_discount is not None:
            applied = DiscountRead(
                type=result.applied_discount.kind,
                value=Decimal(result.applied_discount.value),
            )
        return cls(
            start_time=result.start_time,
            end_time=result.end_time,
            total_minutes=result.total_minutes,
            details=[
                PricingDetailRead.model_validate(detail) for detail in result.details
            ],
            subtotal=result.subtotal,
            discount_amount=result.discount_amount,
            total=result.total,
            applied_discount=applied,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting an absent discount."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
