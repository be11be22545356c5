"""Rate-table construction and per-unit price lookup."""

from __future__ import annotations

import logging
from typing import Sequence, assert_never

from studio_pricing.core.config import Settings, get_settings
from studio_pricing.core.errors import (
    ErrorCode,
    QuoteValidationError,
    RuleNotFoundError,
)
from studio_pricing.models import PricingRule, RateBand

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "default"


def _default_price(band: RateBand, settings: Settings) -> int:
    match band:
        case RateBand.DAY:
            return settings.default_day_rate
        case RateBand.NIGHT:
            return settings.default_night_rate
        case _:
            assert_never(band)


def default_rate_table(settings: Settings | None = None) -> list[PricingRule]:
    """Return the built-in flat table for headcounts up to the configured maximum."""
    settings = settings or get_settings()
    return [
        PricingRule(
            band=band,
            headcount=headcount,
            price_per_unit=_default_price(band, settings),
        )
        for band in RateBand
        for headcount in range(1, settings.default_rate_max_headcount + 1)
    ]


def rate_table_for_channel(
    channel: str | None, *, settings: Settings | None = None
) -> list[PricingRule]:
    """Return the rate table configured for a booking channel."""
    settings = settings or get_settings()
    if channel is None or channel == DEFAULT_CHANNEL:
        return default_rate_table(settings)
    rows = settings.channel_rate_tables.get(channel)
    if rows is None:
        raise QuoteValidationError(
            ErrorCode.UNKNOWN_CHANNEL, f"unknown pricing channel: {channel}"
        )
    return [
        PricingRule(
            band=RateBand(row.band),
            headcount=row.headcount,
            price_per_unit=row.price_per_unit,
        )
        for row in rows
    ]


def resolve_rate(
    rate_table: Sequence[PricingRule], band: RateBand, headcount: int
) -> int:
    """Return the price per unit for ``band`` and ``headcount``."""
    for rule in rate_table:
        if rule.band == band and rule.headcount == headcount:
            return rule.price_per_unit
    logger.warning(
        "No rate rule for band=%s headcount=%s in a table of %d row(s)",
        band.value,
        headcount,
        len(rate_table),
    )
    raise RuleNotFoundError(band.value, headcount)
