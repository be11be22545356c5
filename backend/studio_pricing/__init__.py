"""Quote engine for time-banded studio reservations."""

__version__ = "0.1.0"
