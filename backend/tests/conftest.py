"""Test fixtures for the studio pricing engine."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from studio_pricing.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Drop cached settings so environment tweaks never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    """Provide default pricing settings independent of the process environment."""
    return Settings(
        unit_minutes=30,
        min_reservation_minutes=120,
        min_headcount=1,
        max_headcount=10,
        day_start_hour=8,
        night_start_hour=22,
        studio_timezone="Asia/Seoul",
        default_day_rate=20000,
        default_night_rate=12500,
        default_rate_max_headcount=5,
        channel_rate_tables={},
        log_level="INFO",
    )

