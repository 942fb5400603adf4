"""marketbars core: models, configuration, logging and the bar fetcher."""

from marketbars.core.config.settings import ConfigManager, MarketBarsConfig
from marketbars.core.data.providers.polygon import BarFetcher
from marketbars.core.models.bar import Bar, BarRequest, FetchResult
from marketbars.core.models.market import Interval, IntervalSpec, Timespan

__all__ = [
    "BarFetcher",
    "ConfigManager",
    "MarketBarsConfig",
    "Bar",
    "BarRequest",
    "FetchResult",
    "Interval",
    "IntervalSpec",
    "Timespan",
]
