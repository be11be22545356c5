"""Time-of-day band classification."""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from studio_pricing.core.config import Settings, get_settings
from studio_pricing.models import RateBand


def resolve_timezone(settings: Settings | None = None) -> ZoneInfo:
    """Return the studio timezone, falling back to UTC when unknown."""
    settings = settings or get_settings()
    try:
        return ZoneInfo(settings.studio_timezone)
    except ZoneInfoNotFoundError:  # pragma: no cover - depends on system tz database
        return ZoneInfo("UTC")


def normalize_datetime(candidate: datetime) -> datetime:
    """Move aware timestamps to UTC; naive ones are studio wall-clock and stay put."""
    if candidate.tzinfo is None:
        return candidate
    return candidate.astimezone(UTC)


def _to_local(candidate: datetime, tz: ZoneInfo) -> datetime:
    if candidate.tzinfo is None:
        return candidate
    return candidate.astimezone(tz)


def classify(timestamp: datetime, *, settings: Settings | None = None) -> RateBand:
    """Return the rate band that governs ``timestamp``."""
    settings = settings or get_settings()
    local = _to_local(timestamp, resolve_timezone(settings))
    if settings.day_start_hour <= local.hour < settings.night_start_hour:
        return RateBand.DAY
    return RateBand.NIGHT


def next_band_boundary(
    timestamp: datetime, *, settings: Settings | None = None
) -> datetime:
    """Return the first band boundary strictly after ``timestamp``."""
    settings = settings or get_settings()
    tz = resolve_timezone(settings)
    local = _to_local(timestamp, tz)
    hours = (settings.day_start_hour, settings.night_start_hour)
    for offset in (0, 1):
        day = local.date() + timedelta(days=offset)
        for hour in hours:
            candidate = datetime.combine(day, time(hour), tzinfo=local.tzinfo)
            if candidate > local:
                if timestamp.tzinfo is None:
                    return candidate
                return candidate.astimezone(UTC)
    raise AssertionError("no band boundary within two days")  # pragma: no cover


def iter_band_boundaries(
    start: datetime, end: datetime, *, settings: Settings | None = None
) -> Iterator[datetime]:
    """Yield every band boundary strictly inside ``(start, end)`` in order."""
    settings = settings or get_settings()
    boundary = next_band_boundary(start, settings=settings)
    while boundary < end:
        yield boundary
        boundary = next_band_boundary(boundary, settings=settings)
