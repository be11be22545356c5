"""Service layer exports."""
from studio_pricing.services import (
    discount_service,
    rate_service,
    segmentation_service,
    time_band_service,
    validation_service,
    quote_service,
)

__all__ = [
    "discount_service",
    "quote_service",
    "rate_service",
    "segmentation_service",
    "time_band_service",
    "validation_service",
]
