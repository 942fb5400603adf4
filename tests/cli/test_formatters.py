from __future__ import annotations

import io
import json

import pytest

from marketbars.cli.formatters import JSONLFormatter, TableFormatter, create_formatter, format_value

COLUMNS = ["time", "open", "high", "low", "close", "volume"]


@pytest.mark.parametrize(
    ("column", "value", "expected"),
    [
        ("time", 1700000000, "1700000000"),
        ("open", 1.5, "1.5000"),
        ("close", float("nan"), "NaN"),
        ("high", float("-inf"), "-inf"),
        ("volume", 1234567.0, "1,234,567"),
        ("volume", 0.25, "0.2500"),
        ("timespan", "minute", "minute"),
        ("close", None, "-"),
    ],
)
def test_format_value(column, value, expected) -> None:
    assert format_value(column, value) == expected


def test_jsonl_output_is_strict_json() -> None:
    stream = io.StringIO()
    rows = [{"time": 1, "open": float("nan"), "high": float("inf"), "low": 0.5, "close": 1.0, "volume": 0.0}]

    JSONLFormatter().render(rows, stream=stream, columns=COLUMNS)

    line = stream.getvalue().strip()
    assert "NaN" not in line
    assert "Infinity" not in line
    assert json.loads(line) == {"time": 1, "open": None, "high": None, "low": 0.5, "close": 1.0, "volume": 0.0}


def test_jsonl_keeps_only_requested_columns() -> None:
    stream = io.StringIO()

    JSONLFormatter().render([{"time": 1, "close": 2.0, "extra": "x"}], stream=stream, columns=["time", "close"])

    assert json.loads(stream.getvalue()) == {"time": 1, "close": 2.0}


def test_table_without_rows_prints_notice() -> None:
    stream = io.StringIO()

    TableFormatter(no_color=True).render([], stream=stream, columns=COLUMNS)

    assert stream.getvalue().strip() == "No data available."


def test_create_formatter_rejects_unknown_names() -> None:
    assert isinstance(create_formatter(" JSONL "), JSONLFormatter)
    with pytest.raises(ValueError, match="Available formats: table, jsonl"):
        create_formatter("xml")
