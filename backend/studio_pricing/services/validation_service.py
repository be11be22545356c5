"""Quote input validation.

Checks run in a fixed order and the first failure wins:

1. time ordering
2. minimum duration
3. headcount-change times (bounds, then uniqueness)
4. headcounts (initial, then each change)
5. discount
6. rate table
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Sequence

from studio_pricing.core.config import Settings, get_settings
from studio_pricing.core.errors import ErrorCode, QuoteValidationError
from studio_pricing.models import (
    FixedDiscount,
    HeadcountChange,
    PercentageDiscount,
    PricingRule,
    QuoteInput,
    RateBand,
)
from studio_pricing.services.time_band_service import normalize_datetime

_HUNDRED = Decimal("100")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def validate_quote_input(
    quote_input: QuoteInput, *, settings: Settings | None = None
) -> None:
    """Raise ``QuoteValidationError`` for the first violated input rule."""
    settings = settings or get_settings()
    _check_time_range(quote_input.start_time, quote_input.end_time)
    start = normalize_datetime(quote_input.start_time)
    end = normalize_datetime(quote_input.end_time)
    _check_duration(start, end, settings)
    changes = list(quote_input.headcount_changes or ())
    _check_change_times(changes, start, end)
    _check_headcounts(quote_input.initial_headcount, changes, settings)
    _check_discount(quote_input.discount)
    if quote_input.rate_table is not None:
        validate_rate_table(quote_input.rate_table)


def _check_time_range(start: Any, end: Any) -> None:
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        raise QuoteValidationError(
            ErrorCode.INVALID_TIME_RANGE, "start and end times must be timestamps"
        )
    if _is_aware(start) != _is_aware(end):
        raise QuoteValidationError(
            ErrorCode.INVALID_TIME_RANGE,
            "start and end times must both include a timezone or both omit it",
        )
    if not normalize_datetime(start) < normalize_datetime(end):
        raise QuoteValidationError(
            ErrorCode.INVALID_TIME_RANGE, "start time must precede end time"
        )


def _check_duration(start: datetime, end: datetime, settings: Settings) -> None:
    if end - start < timedelta(minutes=settings.min_reservation_minutes):
        raise QuoteValidationError(
            ErrorCode.RESERVATION_TOO_SHORT,
            f"minimum reservation duration is {settings.min_reservation_minutes} minutes",
        )


def _check_change_times(
    changes: Sequence[HeadcountChange], start: datetime, end: datetime
) -> None:
    moments: list[datetime] = []
    for change in changes:
        if not isinstance(change, HeadcountChange):
            raise QuoteValidationError(
                ErrorCode.INVALID_CHANGE_TIME,
                "headcount changes must provide a time and a new headcount",
            )
        if not isinstance(change.time, datetime) or _is_aware(change.time) != _is_aware(
            start
        ):
            raise QuoteValidationError(
                ErrorCode.INVALID_CHANGE_TIME,
                "headcount change time must use the same timezone convention as the reservation",
            )
        moment = normalize_datetime(change.time)
        if not start < moment < end:
            raise QuoteValidationError(
                ErrorCode.INVALID_CHANGE_TIME,
                "headcount change time must fall strictly inside the reservation",
            )
        moments.append(moment)
    if len(set(moments)) != len(moments):
        raise QuoteValidationError(
            ErrorCode.DUPLICATE_CHANGE_TIME,
            "duplicate headcount-change timestamps are not allowed",
        )


def _check_headcounts(
    initial: Any, changes: Sequence[HeadcountChange], settings: Settings
) -> None:
    for headcount in (initial, *(change.new_headcount for change in changes)):
        if not _is_int(headcount) or not (
            settings.min_headcount <= headcount <= settings.max_headcount
        ):
            raise QuoteValidationError(
                ErrorCode.INVALID_HEADCOUNT,
                f"headcount must be between {settings.min_headcount} and {settings.max_headcount}",
            )


def _check_discount(discount: Any) -> None:
    match discount:
        case None:
            return
        case PercentageDiscount(value=value):
            if (
                not isinstance(value, Decimal)
                or not value.is_finite()
                or not 0 <= value <= _HUNDRED
            ):
                raise QuoteValidationError(
                    ErrorCode.INVALID_DISCOUNT,
                    "discount percentage must be between 0 and 100",
                )
        case FixedDiscount(value=value):
            whole = _is_int(value) or (
                isinstance(value, Decimal)
                and value.is_finite()
                and value == value.to_integral_value()
            )
            if not whole or value < 0:
                raise QuoteValidationError(
                    ErrorCode.INVALID_DISCOUNT,
                    "fixed discount must be a non-negative whole amount",
                )
        case _:
            raise QuoteValidationError(
                ErrorCode.INVALID_DISCOUNT, "discount type must be percentage or fixed"
            )


def validate_rate_table(rate_table: Sequence[PricingRule]) -> None:
    """Reject rate tables with malformed rows or duplicate keys."""
    seen: set[tuple[RateBand, int]] = set()
    for rule in rate_table:
        if not isinstance(rule, PricingRule) or not _is_int(rule.headcount):
            raise QuoteValidationError(
                ErrorCode.INVALID_RATE_TABLE,
                "rate table rows must provide a band, a headcount and a price",
            )
        try:
            band = RateBand(rule.band)
        except ValueError as exc:
            raise QuoteValidationError(
                ErrorCode.INVALID_RATE_TABLE, f"unknown rate band: {rule.band}"
            ) from exc
        if not _is_int(rule.price_per_unit) or rule.price_per_unit < 0:
            raise QuoteValidationError(
                ErrorCode.INVALID_RATE_TABLE,
                "rate table prices must be non-negative whole amounts",
            )
        key = (band, rule.headcount)
        if key in seen:
            raise QuoteValidationError(
                ErrorCode.INVALID_RATE_TABLE,
                f"rate table has more than one rule for band={band.value}, headcount={rule.headcount}",
            )
        seen.add(key)
