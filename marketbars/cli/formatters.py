"""Renderers for bar and interval rows."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

PRICE_COLUMNS = frozenset({"open", "high", "low", "close"})
NUMERIC_COLUMNS = PRICE_COLUMNS | {"time", "volume", "multiplier"}
PRICE_DECIMALS = 4

Row = Mapping[str, object]


def finite_or_none(value: object) -> object:
    """Map NaN and infinities to None so they serialize as JSON ``null``."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def format_value(column: str, value: object) -> str:
    """Text for one table cell."""
    if value is None:
        return "-"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if column in PRICE_COLUMNS:
            return f"{value:.{PRICE_DECIMALS}f}"
        if column == "volume":
            return f"{value:,.0f}" if value.is_integer() else f"{value:,.{PRICE_DECIMALS}f}"
    return str(value)


class RowFormatter:
    """Base class for the ``--format`` choices."""

    name: str

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str]) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(RowFormatter):
    """Rich table, numbers right aligned, prices at fixed precision."""

    name: str = "table"
    no_color: bool = False

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str]) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        if not rows:
            console.print("No data available.")
            return

        table = Table(box=SIMPLE, header_style="" if self.no_color else "bold")
        for column in columns:
            table.add_column(column, justify="right" if column in NUMERIC_COLUMNS else "left")
        for row in rows:
            table.add_row(*(format_value(column, row.get(column)) for column in columns))
        console.print(table)


@dataclass(slots=True)
class JSONLFormatter(RowFormatter):
    """One strict JSON object per row; non-finite numbers become ``null``."""

    name: str = "jsonl"

    def render(self, rows: Sequence[Row], *, stream: TextIO, columns: Sequence[str]) -> None:
        for row in rows:
            record = {column: finite_or_none(row.get(column)) for column in columns}
            stream.write(json.dumps(record, ensure_ascii=False, allow_nan=False, default=str))
            stream.write("\n")
        stream.flush()


FORMATTERS: dict[str, type[RowFormatter]] = {"table": TableFormatter, "jsonl": JSONLFormatter}


def create_formatter(name: str, *, no_color: bool = False) -> RowFormatter:
    """Build the formatter registered under ``name`` (case-insensitive)."""
    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized in FORMATTERS:
        return FORMATTERS[normalized]()
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(FORMATTERS)}.")


__all__ = [
    "FORMATTERS",
    "JSONLFormatter",
    "RowFormatter",
    "TableFormatter",
    "create_formatter",
    "finite_or_none",
    "format_value",
]
