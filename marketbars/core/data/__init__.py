"""Data retrieval layer."""

from marketbars.core.data.providers import BarFetcher
from marketbars.core.data.timestamps import parse_boundary, to_utc_iso

__all__ = ["BarFetcher", "parse_boundary", "to_utc_iso"]
