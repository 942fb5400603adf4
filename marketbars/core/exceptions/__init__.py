"""Exception handling module."""

from marketbars.core.exceptions.base import (
    DataValidationError,
    MarketBarsError,
    NetworkError,
    ProviderError,
    RateLimitError,
)

__all__ = [
    "MarketBarsError",
    "ProviderError",
    "NetworkError",
    "RateLimitError",
    "DataValidationError",
]
