"""Error codes and exceptions raised by the pricing engine."""

from __future__ import annotations

import enum


class ErrorCode(str, enum.Enum):
    """Machine-readable failure codes."""

    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    RESERVATION_TOO_SHORT = "RESERVATION_TOO_SHORT"
    INVALID_CHANGE_TIME = "INVALID_CHANGE_TIME"
    DUPLICATE_CHANGE_TIME = "DUPLICATE_CHANGE_TIME"
    INVALID_HEADCOUNT = "INVALID_HEADCOUNT"
    INVALID_DISCOUNT = "INVALID_DISCOUNT"
    INVALID_RATE_TABLE = "INVALID_RATE_TABLE"
    UNKNOWN_CHANNEL = "UNKNOWN_CHANNEL"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"


class PricingError(Exception):
    """Base pricing error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


class QuoteValidationError(PricingError, ValueError):
    """Raised when a quote request violates an input invariant."""


class RuleNotFoundError(PricingError, LookupError):
    """Raised when the rate table has no row for a band/headcount pair."""

    def __init__(self, band: str, headcount: int) -> None:
        super().__init__(
            ErrorCode.RULE_NOT_FOUND,
            f"Pricing rule not found for band={band}, headcount={headcount}",
        )
        self.band = band
        self.headcount = headcount


__all__ = [
    "ErrorCode",
    "PricingError",
    "QuoteValidationError",
    "RuleNotFoundError",
]
