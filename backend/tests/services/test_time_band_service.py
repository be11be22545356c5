"""Tests for day/night band classification."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta, timezone

import pytest

from studio_pricing.core.config import Settings
from studio_pricing.models import RateBand
from studio_pricing.services.time_band_service import (
    classify,
    iter_band_boundaries,
    next_band_boundary,
    normalize_datetime,
)

KST = timezone(timedelta(hours=9))


def _at(hour: int, minute: int = 0, *, day: int = 15) -> datetime:
    return datetime(2024, 1, day, hour, minute)


@pytest.mark.parametrize(
    ("hour", "minute", "expected"),
    [
        (0, 0, RateBand.NIGHT),
        (7, 59, RateBand.NIGHT),
        (8, 0, RateBand.DAY),
        (12, 30, RateBand.DAY),
        (21, 59, RateBand.DAY),
        (22, 0, RateBand.NIGHT),
        (23, 30, RateBand.NIGHT),
    ],
)
def test_classify_uses_local_hour(
    settings: Settings, hour: int, minute: int, expected: RateBand
) -> None:
    assert classify(_at(hour, minute), settings=settings) is expected


def test_classify_honours_configured_night_start(settings: Settings) -> None:
    early_night = settings.model_copy(update={"night_start_hour": 20})

    assert classify(_at(19, 59), settings=early_night) is RateBand.DAY
    assert classify(_at(20, 0), settings=early_night) is RateBand.NIGHT


def test_classify_converts_aware_timestamps_to_studio_time(settings: Settings) -> None:
    # 13:00 UTC is 22:00 in Seoul
    assert classify(datetime(2024, 1, 15, 13, 0, tzinfo=UTC), settings=settings) is (
        RateBand.NIGHT
    )
    assert classify(datetime(2024, 1, 15, 12, 59, tzinfo=UTC), settings=settings) is (
        RateBand.DAY
    )
    assert classify(datetime(2024, 1, 15, 21, 0, tzinfo=KST), settings=settings) is (
        RateBand.DAY
    )


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (_at(10), _at(22)),
        (_at(8), _at(22)),
        (_at(22), _at(8, day=16)),
        (_at(23, 15), _at(8, day=16)),
        (_at(3), _at(8)),
        (_at(21, 59), _at(22)),
    ],
)
def test_next_band_boundary_is_strictly_after(
    settings: Settings, moment: datetime, expected: datetime
) -> None:
    assert next_band_boundary(moment, settings=settings) == expected


def test_next_band_boundary_for_aware_timestamp_returns_utc(settings: Settings) -> None:
    boundary = next_band_boundary(
        datetime(2024, 1, 15, 21, 0, tzinfo=KST), settings=settings
    )

    assert boundary == datetime(2024, 1, 15, 13, 0, tzinfo=UTC)
    assert boundary.utcoffset() == timedelta(0)


def test_iter_band_boundaries_overnight(settings: Settings) -> None:
    boundaries = list(
        iter_band_boundaries(_at(20), _at(10, day=16), settings=settings)
    )

    assert boundaries == [_at(22), _at(8, day=16)]


def test_iter_band_boundaries_excludes_interval_edges(settings: Settings) -> None:
    assert list(iter_band_boundaries(_at(22), _at(8, day=16), settings=settings)) == []


def test_normalize_datetime_keeps_naive_and_moves_aware_to_utc() -> None:
    naive = _at(10)
    aware = datetime(2024, 1, 15, 10, 0, tzinfo=KST)

    assert normalize_datetime(naive) is naive
    assert normalize_datetime(aware) == datetime(2024, 1, 15, 1, 0, tzinfo=UTC)
    assert normalize_datetime(aware).tzinfo is UTC


def test_iter_band_boundaries_is_lazy(settings: Settings) -> None:
    boundaries = iter_band_boundaries(_at(0), _at(0, day=30), settings=settings)

    assert isinstance(boundaries, Iterator)
    assert next(boundaries) == _at(8)
    assert next(boundaries) == _at(22)
