"""marketbars - historical OHLCV bars from Polygon.io.

Fetches one page of aggregates for a symbol and normalizes them into
:class:`Bar` records. Failures degrade to an empty list.
"""

import asyncio

from marketbars.core.data.providers.polygon import BarFetcher
from marketbars.core.models.bar import Bar, BarRequest, FetchResult
from marketbars.core.models.market import Interval

_fetcher: BarFetcher | None = None


def get_fetcher() -> BarFetcher:
    """Return the process-wide fetcher, creating it on first use."""
    global _fetcher
    if _fetcher is None:
        _fetcher = BarFetcher()
    return _fetcher


async def get_async(symbol: str, start: str, end: str, interval: str = "1m") -> list[Bar]:
    """Fetch bars asynchronously.

    Args:
        symbol: ticker, e.g. ``AAPL``
        start: inclusive range start, ISO-8601 date or date-time
        end: inclusive range end, ISO-8601 date or date-time
        interval: one of ``1m``, ``5m``, ``15m``, ``1h``, ``4h``, ``1D``;
            anything else is served as ``1m``

    Returns:
        Bars in ascending time order, or an empty list.

    Examples:
        >>> import asyncio
        >>> import marketbars
        >>> bars = asyncio.run(marketbars.get_async("AAPL", "2024-01-01", "2024-01-02", "1h"))
    """
    request = BarRequest(symbol=symbol, start=start, end=end, interval=interval)
    return await get_fetcher().fetch(request)


def get(symbol: str, start: str, end: str, interval: str = "1m") -> list[Bar]:
    """Synchronous variant of :func:`get_async`."""
    return asyncio.run(get_async(symbol, start, end, interval))


__version__ = "0.1.0"

__all__ = [
    "Bar",
    "BarFetcher",
    "BarRequest",
    "FetchResult",
    "Interval",
    "get",
    "get_async",
    "get_fetcher",
]
