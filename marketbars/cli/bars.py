"""Bar command implementations for the marketbars CLI."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError

from marketbars.core.config.settings import ProviderConfig
from marketbars.core.data.providers.polygon import BarFetcher
from marketbars.core.exceptions.base import DataValidationError
from marketbars.core.models.bar import BarRequest
from marketbars.core.models.market import INTERVAL_SPECS

from .constants import VALIDATION_EXIT_CODE
from .utils import emit_error, prepare_output

bars_app = typer.Typer(help="Bar operations.")

DEFAULT_COLUMNS = ["time", "open", "high", "low", "close", "volume"]
INTERVAL_COLUMNS = ["interval", "multiplier", "timespan"]


def register(app: typer.Typer) -> None:
    """Register the bars command group on the provided application."""

    app.add_typer(bars_app, name="bars", help="Fetch historical price bars")


def get_fetcher(config: ProviderConfig, *, drop_invalid_bars: bool = False) -> BarFetcher:
    """Factory hook for obtaining a :class:`BarFetcher` instance."""

    return BarFetcher(config, drop_invalid_bars=drop_invalid_bars)


@bars_app.command("fetch")
def fetch_command(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Ticker symbol, e.g. AAPL."),
    start: str = typer.Option(..., "--from", help="Range start (ISO-8601 date or date-time)."),
    end: str = typer.Option(..., "--to", help="Range end (ISO-8601 date or date-time)."),
    interval: str = typer.Option("1m", "--interval", "-i", help="Bar interval code."),
    drop_invalid: bool = typer.Option(
        False,
        "--drop-invalid",
        help="Drop bars with prices or volume that could not be parsed.",
    ),
) -> None:
    """Fetch bars for SYMBOL and render them with the configured formatter."""

    try:
        request = BarRequest(symbol=symbol, start=start, end=end, interval=interval)
    except ValidationError as error:
        messages = [item["msg"] for item in error.errors()]
        emit_error("; ".join(messages), "VALIDATION_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error

    formatter, stream, stack, options = prepare_output(ctx)
    with stack:
        fetcher = get_fetcher(options.config.provider, drop_invalid_bars=drop_invalid)
        try:
            result = asyncio.run(fetcher.fetch_result(request))
        except DataValidationError as error:
            emit_error(error.message, error.error_code, details=error.details)
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from error

        if result.interval_substituted:
            typer.echo(
                f"Interval '{result.requested_interval}' is not supported, "
                f"showing {result.interval.value} bars.",
                err=True,
            )

        rows = [bar.model_dump() for bar in result.bars]
        formatter.render(rows, stream=stream, columns=DEFAULT_COLUMNS)


@bars_app.command("intervals")
def intervals_command(ctx: typer.Context) -> None:
    """List the supported interval codes."""

    formatter, stream, stack, _ = prepare_output(ctx)
    rows = [
        {"interval": interval.value, "multiplier": spec.multiplier, "timespan": spec.timespan.value}
        for interval, spec in INTERVAL_SPECS.items()
    ]
    with stack:
        formatter.render(rows, stream=stream, columns=INTERVAL_COLUMNS)


__all__ = ["register", "bars_app", "fetch_command", "intervals_command", "get_fetcher"]
