"""Tests for quote input validation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from studio_pricing.core.config import Settings
from studio_pricing.core.errors import ErrorCode, QuoteValidationError
from studio_pricing.models import (
    FixedDiscount,
    HeadcountChange,
    PercentageDiscount,
    PricingRule,
    QuoteInput,
    RateBand,
)
from studio_pricing.services.validation_service import (
    validate_quote_input,
    validate_rate_table,
)

KST = timezone(timedelta(hours=9))


def _at(hour: int, minute: int = 0, *, day: int = 15) -> datetime:
    return datetime(2024, 1, day, hour, minute)


def _input(
    start: datetime = _at(10),
    end: datetime = _at(13),
    headcount: int = 3,
    **kwargs,
) -> QuoteInput:
    return QuoteInput(
        start_time=start, end_time=end, initial_headcount=headcount, **kwargs
    )


def _reject(quote_input: QuoteInput, settings: Settings) -> QuoteValidationError:
    with pytest.raises(QuoteValidationError) as excinfo:
        validate_quote_input(quote_input, settings=settings)
    return excinfo.value


def test_valid_input_passes(settings: Settings) -> None:
    validate_quote_input(
        _input(
            headcount_changes=[HeadcountChange(_at(11), 5)],
            discount=PercentageDiscount(Decimal("10")),
            rate_table=[PricingRule(RateBand.DAY, 3, 8000)],
        ),
        settings=settings,
    )


def test_exact_minimum_duration_is_accepted(settings: Settings) -> None:
    validate_quote_input(_input(_at(10), _at(12)), settings=settings)


@pytest.mark.parametrize("end", [_at(9), _at(10)])
def test_end_not_after_start(settings: Settings, end: datetime) -> None:
    error = _reject(_input(_at(10), end), settings)

    assert error.code is ErrorCode.INVALID_TIME_RANGE
    assert str(error) == "start time must precede end time"


def test_mixed_timezone_awareness_is_rejected(settings: Settings) -> None:
    error = _reject(
        _input(_at(10), datetime(2024, 1, 15, 13, 0, tzinfo=KST)), settings
    )

    assert error.code is ErrorCode.INVALID_TIME_RANGE


def test_short_reservation(settings: Settings) -> None:
    error = _reject(_input(_at(10), _at(10, 59)), settings)

    assert error.code is ErrorCode.RESERVATION_TOO_SHORT
    assert str(error) == "minimum reservation duration is 120 minutes"


def test_duration_uses_absolute_time_for_aware_inputs(settings: Settings) -> None:
    start = datetime(2024, 1, 15, 10, 0, tzinfo=KST)
    end = datetime(2024, 1, 15, 3, 0, tzinfo=UTC)  # 12:00 in Seoul

    validate_quote_input(_input(start, end), settings=settings)


@pytest.mark.parametrize("moment", [_at(10), _at(13), _at(9), _at(14)])
def test_change_time_must_be_strictly_inside(
    settings: Settings, moment: datetime
) -> None:
    error = _reject(
        _input(headcount_changes=[HeadcountChange(moment, 4)]), settings
    )

    assert error.code is ErrorCode.INVALID_CHANGE_TIME
    assert str(error) == "headcount change time must fall strictly inside the reservation"


def test_duplicate_change_times(settings: Settings) -> None:
    error = _reject(
        _input(
            headcount_changes=[
                HeadcountChange(_at(11), 4),
                HeadcountChange(_at(12), 2),
                HeadcountChange(_at(11), 5),
            ]
        ),
        settings,
    )

    assert error.code is ErrorCode.DUPLICATE_CHANGE_TIME
    assert str(error) == "duplicate headcount-change timestamps are not allowed"


def test_duplicate_detection_compares_instants(settings: Settings) -> None:
    start = datetime(2024, 1, 15, 10, 0, tzinfo=KST)
    end = datetime(2024, 1, 15, 14, 0, tzinfo=KST)
    changes = [
        HeadcountChange(datetime(2024, 1, 15, 12, 0, tzinfo=KST), 4),
        HeadcountChange(datetime(2024, 1, 15, 3, 0, tzinfo=UTC), 5),
    ]

    error = _reject(_input(start, end, headcount_changes=changes), settings)

    assert error.code is ErrorCode.DUPLICATE_CHANGE_TIME


@pytest.mark.parametrize("headcount", [0, 11, -1])
def test_initial_headcount_bounds(settings: Settings, headcount: int) -> None:
    error = _reject(_input(headcount=headcount), settings)

    assert error.code is ErrorCode.INVALID_HEADCOUNT
    assert str(error) == "headcount must be between 1 and 10"


def test_non_integer_headcount(settings: Settings) -> None:
    error = _reject(_input(headcount=True), settings)  # type: ignore[arg-type]

    assert error.code is ErrorCode.INVALID_HEADCOUNT


def test_changed_headcount_bounds(settings: Settings) -> None:
    error = _reject(
        _input(headcount_changes=[HeadcountChange(_at(11), 12)]), settings
    )

    assert error.code is ErrorCode.INVALID_HEADCOUNT


@pytest.mark.parametrize("percent", ["150", "-1", "100.01", "NaN"])
def test_percentage_bounds(settings: Settings, percent: str) -> None:
    error = _reject(_input(discount=PercentageDiscount(Decimal(percent))), settings)

    assert error.code is ErrorCode.INVALID_DISCOUNT
    assert str(error) == "discount percentage must be between 0 and 100"


@pytest.mark.parametrize("percent", ["0", "100", "33.33"])
def test_percentage_edges_are_accepted(settings: Settings, percent: str) -> None:
    validate_quote_input(
        _input(discount=PercentageDiscount(Decimal(percent))), settings=settings
    )


@pytest.mark.parametrize("value", [-5, Decimal("10.5"), "100"])
def test_fixed_discount_must_be_whole_and_non_negative(
    settings: Settings, value
) -> None:
    error = _reject(_input(discount=FixedDiscount(value)), settings)

    assert error.code is ErrorCode.INVALID_DISCOUNT
    assert str(error) == "fixed discount must be a non-negative whole amount"


def test_unknown_discount_shape(settings: Settings) -> None:
    error = _reject(_input(discount={"type": "percentage", "value": 10}), settings)  # type: ignore[arg-type]

    assert error.code is ErrorCode.INVALID_DISCOUNT


def test_first_failure_wins(settings: Settings) -> None:
    everything_wrong = _input(
        _at(13),
        _at(10),
        headcount=11,
        headcount_changes=[HeadcountChange(_at(20), 0)],
        discount=PercentageDiscount(Decimal("150")),
    )
    assert _reject(everything_wrong, settings).code is ErrorCode.INVALID_TIME_RANGE

    short_and_crowded = _input(_at(10), _at(11), headcount=11)
    assert _reject(short_and_crowded, settings).code is (
        ErrorCode.RESERVATION_TOO_SHORT
    )

    change_before_headcount = _input(
        headcount=11, headcount_changes=[HeadcountChange(_at(20), 4)]
    )
    assert _reject(change_before_headcount, settings).code is (
        ErrorCode.INVALID_CHANGE_TIME
    )

    headcount_before_discount = _input(
        headcount=0, discount=FixedDiscount(-1)
    )
    assert _reject(headcount_before_discount, settings).code is (
        ErrorCode.INVALID_HEADCOUNT
    )


def test_rate_table_rejects_duplicates() -> None:
    with pytest.raises(QuoteValidationError) as excinfo:
        validate_rate_table(
            [
                PricingRule(RateBand.DAY, 2, 7000),
                PricingRule(RateBand.DAY, 2, 7500),
            ]
        )

    assert excinfo.value.code is ErrorCode.INVALID_RATE_TABLE


@pytest.mark.parametrize(
    "rule",
    [
        PricingRule(RateBand.DAY, 2, -1),
        PricingRule(RateBand.DAY, 2, 7000.5),  # type: ignore[arg-type]
        PricingRule("EVENING", 2, 7000),  # type: ignore[arg-type]
    ],
)
def test_rate_table_rejects_malformed_rows(settings: Settings, rule: PricingRule) -> None:
    error = _reject(_input(rate_table=[rule]), settings)

    assert error.code is ErrorCode.INVALID_RATE_TABLE


def test_change_bounds_are_checked_before_duplicates(settings: Settings) -> None:
    error = _reject(
        _input(
            _at(10),
            _at(13),
            headcount_changes=[
                HeadcountChange(_at(11), 4),
                HeadcountChange(_at(11), 5),
                HeadcountChange(_at(14), 2),
            ],
        ),
        settings,
    )

    assert error.code is ErrorCode.INVALID_CHANGE_TIME
