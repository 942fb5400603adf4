"""Pytest configuration for the marketbars test suite."""

from __future__ import annotations

import io
import json
from collections.abc import Callable, Iterator

import pytest

from marketbars.core.logging import LogConfig, StructuredLogger, configure_logging


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--marketbars-run-integration",
        action="store_true",
        default=False,
        help="Run marketbars integration tests that require network access and an API key.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker."""

    config.addinivalue_line(
        "markers",
        "integration: marks tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--marketbars-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --marketbars-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def log_records() -> Iterator[Callable[[], list[dict[str, object]]]]:
    """Route structured logs into a buffer and return a reader for the parsed records."""

    buffer = io.StringIO()
    StructuredLogger(LogConfig(level="DEBUG", console_stream=buffer))

    def read() -> list[dict[str, object]]:
        return [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]

    yield read
    configure_logging()
