"""Pricing engine configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateRowSetting(BaseModel):
    """One configured rate-table row for a booking channel."""

    band: Literal["DAY", "NIGHT"]
    headcount: int = Field(ge=1)
    price_per_unit: int = Field(alias="pricePerUnit", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class Settings(BaseSettings):
    """Typed pricing configuration."""

    app_name: str = "Studio Pricing"

    unit_minutes: int = Field(30, alias="PRICING_UNIT_MINUTES", gt=0)
    min_reservation_minutes: int = Field(
        120, alias="PRICING_MIN_RESERVATION_MINUTES", ge=0
    )
    min_headcount: int = Field(1, alias="PRICING_MIN_HEADCOUNT", ge=1)
    max_headcount: int = Field(10, alias="PRICING_MAX_HEADCOUNT", ge=1)

    day_start_hour: int = Field(8, alias="PRICING_DAY_START_HOUR")
    night_start_hour: int = Field(22, alias="PRICING_NIGHT_START_HOUR")
    studio_timezone: str = Field("Asia/Seoul", alias="STUDIO_TIMEZONE")

    default_day_rate: int = Field(20000, alias="PRICING_DEFAULT_DAY_RATE", ge=0)
    default_night_rate: int = Field(12500, alias="PRICING_DEFAULT_NIGHT_RATE", ge=0)
    default_rate_max_headcount: int = Field(
        5, alias="PRICING_DEFAULT_RATE_MAX_HEADCOUNT", ge=1
    )
    channel_rate_tables: dict[str, list[RateRowSetting]] = Field(
        default_factory=dict, alias="PRICING_CHANNEL_RATE_TABLES"
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("day_start_hour", "night_start_hour")
    @classmethod
    def _check_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("band boundary hour must be between 0 and 23")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _check_bands(self) -> "Settings":
        if self.day_start_hour >= self.night_start_hour:
            raise ValueError("day_start_hour must be earlier than night_start_hour")
        if self.min_headcount > self.max_headcount:
            raise ValueError("min_headcount must not exceed max_headcount")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
