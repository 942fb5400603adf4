"""Bar request and response models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketbars.core.models.market import DEFAULT_INTERVAL, Interval


class BarRequest(BaseModel):
    """Historical bar request for a single symbol."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    start: str = Field(alias="from")
    end: str = Field(alias="to")
    interval: str = DEFAULT_INTERVAL.value

    @field_validator("symbol")
    @classmethod
    def _require_symbol(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Missing symbol")
        return value

    @field_validator("start")
    @classmethod
    def _require_start(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Missing from timestamp")
        return value

    @field_validator("end")
    @classmethod
    def _require_end(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Missing to timestamp")
        return value


class Bar(BaseModel):
    """Single OHLCV observation, ``time`` in Unix seconds."""

    model_config = ConfigDict(frozen=True)

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Whether every price and volume field is a finite number."""
        return all(math.isfinite(value) for value in (self.open, self.high, self.low, self.close, self.volume))


class FetchResult(BaseModel):
    """Bars returned for a request along with how the request was served."""

    symbol: str
    requested_interval: str
    interval: Interval
    bars: list[Bar] = Field(default_factory=list)
    skipped_records: int = 0

    @property
    def interval_substituted(self) -> bool:
        return self.requested_interval != self.interval.value

    @property
    def is_empty(self) -> bool:
        return not self.bars


__all__ = ["Bar", "BarRequest", "FetchResult"]
