"""Quote engine: validate, segment, group, price, discount."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Mapping

from pydantic import ValidationError

from studio_pricing.core.config import Settings, get_settings
from studio_pricing.core.errors import ErrorCode, QuoteValidationError
from studio_pricing.models import PricingDetail, QuoteInput, QuoteResult
from studio_pricing.schemas.quote import QuoteRead, QuoteRequest
from studio_pricing.services import (
    discount_service,
    rate_service,
    segmentation_service,
    validation_service,
)
from studio_pricing.services.time_band_service import normalize_datetime

logger = logging.getLogger(__name__)


def compute_quote(
    quote_input: QuoteInput, *, settings: Settings | None = None
) -> QuoteResult:
    """Produce an itemized quote for the given reservation input."""
    settings = settings or get_settings()
    validation_service.validate_quote_input(quote_input, settings=settings)

    rate_table = quote_input.rate_table
    if rate_table is None:
        rate_table = rate_service.default_rate_table(settings)

    slots = segmentation_service.segment(
        quote_input.start_time,
        quote_input.end_time,
        quote_input.initial_headcount,
        quote_input.headcount_changes,
        settings=settings,
    )
    groups = segmentation_service.group_slots(slots)
    logger.debug(
        "Segmented reservation %s - %s into %d slot(s), %d group(s)",
        quote_input.start_time.isoformat(),
        quote_input.end_time.isoformat(),
        len(slots),
        len(groups),
    )

    details: list[PricingDetail] = []
    for group in groups:
        price = rate_service.resolve_rate(rate_table, group.band, group.headcount)
        details.append(
            PricingDetail(
                band=group.band,
                unit_count=group.unit_count,
                headcount=group.headcount,
                price_per_unit=price,
                subtotal=group.unit_count * price,
            )
        )

    subtotal = sum(detail.subtotal for detail in details)
    discount_amount, total = discount_service.apply_discount(
        subtotal, quote_input.discount
    )
    elapsed = normalize_datetime(quote_input.end_time) - normalize_datetime(
        quote_input.start_time
    )
    total_minutes = elapsed // timedelta(minutes=1)
    logger.debug(
        "Quote priced: subtotal=%d discount=%d total=%d", subtotal, discount_amount, total
    )

    return QuoteResult(
        start_time=quote_input.start_time,
        end_time=quote_input.end_time,
        total_minutes=total_minutes,
        details=details,
        subtotal=subtotal,
        discount_amount=discount_amount,
        total=total,
        applied_discount=quote_input.discount,
    )


def build_quote_input(
    request: QuoteRequest, *, settings: Settings | None = None
) -> QuoteInput:
    """Translate a parsed request into engine input, resolving the channel table."""
    settings = settings or get_settings()
    quote_input = request.to_quote_input()
    if quote_input.rate_table is None and request.channel is not None:
        table = rate_service.rate_table_for_channel(request.channel, settings=settings)
        quote_input = replace(quote_input, rate_table=table)
    return quote_input


def quote_from_payload(
    payload: Mapping[str, Any], *, settings: Settings | None = None
) -> QuoteRead:
    """Parse a raw request mapping, compute the quote and serialize it."""
    settings = settings or get_settings()
    try:
        request = QuoteRequest.model_validate(payload)
    except ValidationError as exc:
        raise QuoteValidationError(
            ErrorCode.INVALID_PAYLOAD, _describe_payload_error(exc)
        ) from exc
    result = compute_quote(build_quote_input(request, settings=settings), settings=settings)
    return QuoteRead.from_result(result)


def _describe_payload_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
    return f"invalid quote request: {location}: {first.get('msg', 'invalid value')}"
