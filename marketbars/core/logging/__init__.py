"""Structured JSON logging on loguru."""

from marketbars.core.logging.config import LogConfig
from marketbars.core.logging.logger import StructuredLogger, bind, configure_logging, log_context, logger

__all__ = ["LogConfig", "StructuredLogger", "bind", "configure_logging", "log_context", "logger"]
