"""Fetch a day of hourly AAPL bars with the library API.

Requires POLYGON_API_KEY in the environment; without it the result is empty.
"""

import asyncio

from marketbars import BarRequest
from marketbars.core.data.providers.polygon import BarFetcher
from marketbars.core.logging import configure_logging, logger


async def main() -> None:
    configure_logging("DEBUG")
    fetcher = BarFetcher()

    result = await fetcher.fetch_result(
        BarRequest(symbol="AAPL", start="2024-01-02", end="2024-01-03", interval="1h")
    )
    if result.interval_substituted:
        logger.info("served as {interval}", interval=result.interval.value)

    for bar in result.bars:
        print(bar.time, bar.open, bar.high, bar.low, bar.close, bar.volume)


if __name__ == "__main__":
    asyncio.run(main())
