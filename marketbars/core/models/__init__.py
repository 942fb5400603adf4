"""Data models module."""

from marketbars.core.models.bar import Bar, BarRequest, FetchResult
from marketbars.core.models.market import (
    DEFAULT_INTERVAL,
    INTERVAL_SPECS,
    Interval,
    IntervalResolution,
    IntervalSpec,
    Timespan,
    resolve_interval,
)

__all__ = [
    "Bar",
    "BarRequest",
    "FetchResult",
    "DEFAULT_INTERVAL",
    "INTERVAL_SPECS",
    "Interval",
    "IntervalResolution",
    "IntervalSpec",
    "Timespan",
    "resolve_interval",
]
