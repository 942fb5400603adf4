"""Interval codes and the provider range table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Timespan(str, Enum):
    """Aggregate unit understood by the provider."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


class Interval(str, Enum):
    """Supported bar interval codes (case-sensitive)."""

    MINUTE_1 = "1m"
    MINUTE_5 = "5m"
    MINUTE_15 = "15m"
    HOUR_1 = "1h"
    HOUR_4 = "4h"
    DAY_1 = "1D"


@dataclass(frozen=True)
class IntervalSpec:
    """Multiplier and unit pair used in the aggregates path."""

    multiplier: int
    timespan: Timespan

    def __post_init__(self) -> None:
        if isinstance(self.multiplier, bool) or not isinstance(self.multiplier, int):
            raise ValueError("multiplier must be an integer")
        if self.multiplier <= 0:
            raise ValueError("multiplier must be positive")


INTERVAL_SPECS: Mapping[Interval, IntervalSpec] = MappingProxyType(
    {
        Interval.MINUTE_1: IntervalSpec(1, Timespan.MINUTE),
        Interval.MINUTE_5: IntervalSpec(5, Timespan.MINUTE),
        Interval.MINUTE_15: IntervalSpec(15, Timespan.MINUTE),
        Interval.HOUR_1: IntervalSpec(1, Timespan.HOUR),
        Interval.HOUR_4: IntervalSpec(4, Timespan.HOUR),
        Interval.DAY_1: IntervalSpec(1, Timespan.DAY),
    }
)

DEFAULT_INTERVAL = Interval.MINUTE_1


@dataclass(frozen=True)
class IntervalResolution:
    """Outcome of looking up a requested interval code."""

    requested: str
    interval: Interval
    spec: IntervalSpec

    @property
    def substituted(self) -> bool:
        """True when the requested code was unknown and the default was used."""
        return self.requested != self.interval.value


def resolve_interval(code: str) -> IntervalResolution:
    """Resolve ``code`` against the interval table, falling back to 1 minute."""

    try:
        interval = Interval(code)
    except ValueError:
        interval = DEFAULT_INTERVAL
    return IntervalResolution(requested=code, interval=interval, spec=INTERVAL_SPECS[interval])


__all__ = [
    "DEFAULT_INTERVAL",
    "INTERVAL_SPECS",
    "Interval",
    "IntervalResolution",
    "IntervalSpec",
    "Timespan",
    "resolve_interval",
]
