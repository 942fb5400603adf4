"""loguru setup emitting one JSON object per record.

Each record carries ``trace_id``, ``provider`` and ``error_code`` at the top
level; every other bound value lands under ``context``.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger
from loguru._logger import Logger as _LoguruLogger  # type: ignore[attr-defined]

from marketbars.core.logging.config import LogConfig

_TRACE_ID: ContextVar[str | None] = ContextVar("marketbars_trace_id", default=None)
_SCOPE: ContextVar[dict[str, Any]] = ContextVar("marketbars_log_scope", default={})

TOP_LEVEL_FIELDS = ("trace_id", "error_code", "provider")


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    for key, value in _SCOPE.get().items():
        if extra.get(key) is None:
            extra[key] = value

    if not extra.get("trace_id"):
        trace_id = _TRACE_ID.get()
        if trace_id is None:
            trace_id = uuid4().hex
            _TRACE_ID.set(trace_id)
        extra["trace_id"] = trace_id

    extra.setdefault("provider", None)
    extra.setdefault("error_code", None)


def _to_json(record: dict[str, Any]) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update((key, extra.get(key)) for key in TOP_LEVEL_FIELDS)
    context = {key: value for key, value in extra.items() if key not in TOP_LEVEL_FIELDS}
    if context:
        payload["context"] = context
    if record["exception"]:
        payload["exception"] = str(record["exception"])
    return json.dumps(payload, default=str)


class _JsonSink:
    """Writes JSON lines to an open stream or appends them to a file."""

    def __init__(self, stream: IO[str] | None = None, path: str | None = None) -> None:
        self._stream = stream
        self._path = Path(path) if path else None
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)

    def __call__(self, message: Any) -> None:
        line = _to_json(message.record) + "\n"
        if self._path is not None:
            with self._path.open("a", encoding="utf-8") as file:
                file.write(line)
            return
        self._stream.write(line)
        self._stream.flush()


def _apply(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        # stdout carries command output
        handlers.append({"sink": _JsonSink(stream=config.console_stream or sys.stderr), "level": config.level})
    if config.file_output and config.file_path:
        handlers.append({"sink": _JsonSink(path=config.file_path), "level": config.level})
    logger.configure(handlers=handlers, patcher=_patch_record, extra=config.extra)


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """(Re)configure the global logger; raises ValueError for unknown levels."""
    _apply(LogConfig(level=level, **kwargs))


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Attach a trace id and extra fields to every record logged inside the block."""
    scope_token = _SCOPE.set({**_SCOPE.get(), **extra})
    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID.set(active_trace)
    try:
        yield active_trace
    finally:
        _TRACE_ID.reset(trace_token)
        _SCOPE.reset(scope_token)


class StructuredLogger:
    """A configured logger plus its :meth:`context` helper."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _apply(self.config)
        self.logger: _LoguruLogger = logger

    def context(self, *, trace_id: str | None = None, **extra: Any):
        return log_context(trace_id=trace_id, **extra)


def bind(**kwargs: Any) -> _LoguruLogger:
    return logger.bind(**kwargs)


configure_logging()


__all__ = ["StructuredLogger", "bind", "configure_logging", "log_context", "logger"]
