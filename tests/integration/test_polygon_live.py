"""Live checks against the Polygon aggregates API."""

import os

import pytest

from marketbars.core.data.providers.polygon import BarFetcher
from marketbars.core.models import BarRequest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_daily_bars_for_aapl():
    if not os.environ.get("POLYGON_API_KEY"):
        pytest.skip("POLYGON_API_KEY is not set")

    bars = await BarFetcher().fetch(
        BarRequest(symbol="AAPL", start="2024-01-02", end="2024-01-05", interval="1D")
    )

    assert bars
    assert [bar.time for bar in bars] == sorted(bar.time for bar in bars)
    assert all(bar.is_valid for bar in bars)
