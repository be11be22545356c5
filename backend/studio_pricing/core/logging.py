"""Logging setup for the pricing package."""

from __future__ import annotations

import logging

from studio_pricing.core.config import Settings, get_settings

PACKAGE_LOGGER = "studio_pricing"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _PricingHandler(logging.StreamHandler):
    """Marker type so repeated configuration does not stack handlers."""


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Apply the configured level to the package logger and attach a handler once."""
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level)
    if not any(isinstance(handler, _PricingHandler) for handler in logger.handlers):
        handler = _PricingHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
