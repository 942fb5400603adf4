"""Market data provider adapters."""

from marketbars.core.data.providers.polygon import (
    AGGREGATES_PATH,
    PAGE_LIMIT,
    BarFetcher,
    normalize_record,
)

__all__ = ["AGGREGATES_PATH", "PAGE_LIMIT", "BarFetcher", "normalize_record"]
