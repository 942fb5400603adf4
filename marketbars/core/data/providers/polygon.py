"""Polygon.io aggregates bar fetcher.

One request per call against ``/v2/aggs/ticker/.../range/...``. Every failure
after the credential check (transport errors, non-2xx statuses, bodies that
are not JSON, payloads without a ``results`` list) is logged and turned into
an empty result instead of an exception.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from marketbars.core.config.settings import CredentialSource, ProviderConfig, env_credential
from marketbars.core.data.timestamps import to_utc_iso
from marketbars.core.exceptions.base import NetworkError, ProviderError, RateLimitError
from marketbars.core.logging import logger
from marketbars.core.models.bar import Bar, BarRequest, FetchResult
from marketbars.core.models.market import IntervalSpec, resolve_interval

PAGE_LIMIT = 5000
AGGREGATES_PATH = "/v2/aggs/ticker/{symbol}/range/{multiplier}/{timespan}/{start}/{end}"


def _to_float(value: Any) -> float:
    """Coerce a provider value to float; anything unparseable becomes NaN."""
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return math.nan
    return math.nan


def _to_seconds(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value // 1000
    millis = _to_float(value)
    if not math.isfinite(millis):
        return None
    return math.floor(millis / 1000)


def normalize_record(record: Any) -> Bar | None:
    """Map one provider aggregate onto a :class:`Bar`.

    Returns None when the record has no usable ``t`` timestamp.
    """
    if not isinstance(record, Mapping):
        return None

    time = _to_seconds(record.get("t"))
    if time is None:
        return None

    volume = record.get("v")
    return Bar(
        time=time,
        open=_to_float(record.get("o")),
        high=_to_float(record.get("h")),
        low=_to_float(record.get("l")),
        close=_to_float(record.get("c")),
        volume=0.0 if volume is None else _to_float(volume),
    )


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After", "")
    return int(value) if value.isdigit() else None


class BarFetcher:
    """Fetch historical bars for one symbol from Polygon."""

    name = "polygon"

    def __init__(
        self,
        config: ProviderConfig | None = None,
        credentials: CredentialSource | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        drop_invalid_bars: bool = False,
    ) -> None:
        """Create a fetcher.

        Args:
            config: endpoint settings, defaults to :class:`ProviderConfig`
            credentials: callable returning the API key, queried on every fetch;
                reads ``config.api_key_env`` from the environment when omitted
            transport: httpx transport override, used by tests
            drop_invalid_bars: drop bars with non-finite prices or volume instead
                of passing them through
        """
        self.config = config or ProviderConfig()
        self._credentials = credentials or env_credential(self.config.api_key_env)
        self._transport = transport
        self.drop_invalid_bars = drop_invalid_bars

    async def fetch(self, request: BarRequest) -> list[Bar]:
        """Return bars for ``request``, or an empty list on any provider failure."""
        result = await self.fetch_result(request)
        return result.bars

    async def fetch_result(self, request: BarRequest) -> FetchResult:
        """Like :meth:`fetch` but reports interval substitution and skipped records."""
        log = logger.bind(provider=self.name, symbol=request.symbol)
        resolution = resolve_interval(request.interval)
        empty = FetchResult(
            symbol=request.symbol,
            requested_interval=request.interval,
            interval=resolution.interval,
        )

        api_key = self._credentials()
        if not api_key:
            log.warning("{env} is not set, no bars fetched", env=self.config.api_key_env)
            return empty
        # header values must be ASCII
        if not api_key.isascii():
            log.warning("{env} contains non-ASCII characters, no bars fetched", env=self.config.api_key_env)
            return empty

        if resolution.substituted:
            log.debug(
                "Unsupported interval {requested!r}, using {resolved}",
                requested=resolution.requested,
                resolved=resolution.interval.value,
            )

        path = self.build_path(
            request.symbol,
            resolution.spec,
            to_utc_iso(request.start),
            to_utc_iso(request.end),
        )

        try:
            payload = await self._get_payload(path, api_key)
        except ProviderError as error:
            log.bind(error_code=error.error_code).error(
                "Polygon request failed: {reason}", reason=error.message, **error.details
            )
            return empty

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            log.debug("Polygon response has no results list")
            return empty

        bars, skipped = self._normalize(results)
        if skipped:
            log.debug("Skipped {count} of {total} records", count=skipped, total=len(results))
        return empty.model_copy(update={"bars": bars, "skipped_records": skipped})

    def build_path(self, symbol: str, spec: IntervalSpec, start: str, end: str) -> str:
        """Aggregates path for ``symbol`` with already normalized boundaries."""
        return AGGREGATES_PATH.format(
            symbol=quote(symbol, safe=""),
            multiplier=spec.multiplier,
            timespan=spec.timespan.value,
            start=start,
            end=end,
        )

    def build_params(self) -> dict[str, str]:
        return {"adjusted": "true", "sort": "asc", "limit": str(PAGE_LIMIT)}

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "base_url": self.config.base_url,
            "headers": {"User-Agent": self.config.user_agent},
        }
        if self.config.timeout is not None:
            options["timeout"] = httpx.Timeout(self.config.timeout)
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def _get_payload(self, path: str, api_key: str) -> Any:
        headers = {"Authorization": f"Bearer {api_key}"}
        async with httpx.AsyncClient(**self._client_options()) as client:
            try:
                response = await client.get(path, params=self.build_params(), headers=headers)
            except httpx.HTTPError as exc:
                raise NetworkError(
                    f"Transport failure: {exc}",
                    self.name,
                    details={"error_type": type(exc).__name__},
                ) from exc

        if response.status_code == 429:
            raise RateLimitError(
                "Polygon API rate limit exceeded",
                self.name,
                retry_after=_retry_after(response),
                details={"body": response.text},
            )
        if not response.is_success:
            raise NetworkError(
                f"Polygon API error: {response.status_code}",
                self.name,
                status_code=response.status_code,
                details={"body": response.text},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                "Polygon response is not valid JSON",
                self.name,
                "DATA_FORMAT_ERROR",
                details={"body": response.text},
            ) from exc

    def _normalize(self, results: list[Any]) -> tuple[list[Bar], int]:
        bars: list[Bar] = []
        skipped = 0
        for record in results:
            bar = normalize_record(record)
            if bar is None or (self.drop_invalid_bars and not bar.is_valid):
                skipped += 1
                continue
            bars.append(bar)
        return bars, skipped


__all__ = ["AGGREGATES_PATH", "PAGE_LIMIT", "BarFetcher", "normalize_record"]
