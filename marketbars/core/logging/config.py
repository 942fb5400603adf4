"""Logging configuration primitives for structured logging."""

from __future__ import annotations

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogConfig(BaseModel):
    """Sink settings for :func:`marketbars.core.logging.configure_logging`.

    ``console_stream`` defaults to stderr when left unset.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console_output: bool = True
    console_stream: Any = None
    file_output: bool = False
    file_path: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        # raises ValueError for names loguru does not know
        logger.level(level)
        return level


__all__ = ["LogConfig"]
