"""Configuration management for the bar fetcher and CLI."""

import os
import tomllib
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from marketbars.core.logging import logger

CredentialSource = Callable[[], str | None]

DEFAULT_CONFIG_PATH = Path.home() / ".marketbars" / "config.toml"


@dataclass
class ProviderConfig:
    """Polygon aggregates endpoint settings."""

    base_url: str = "https://api.polygon.io"
    api_key_env: str = "POLYGON_API_KEY"
    # None keeps the httpx default timeout
    timeout: float | None = None
    user_agent: str = "marketbars/0.1.0"

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if not self.api_key_env:
            raise ValueError("api_key_env cannot be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class MarketBarsConfig:
    """Top level configuration."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MarketBarsConfig":
        """Build a configuration from a nested dictionary."""
        provider_config = ProviderConfig(**config_dict.get("provider", {}))
        logging_config = LoggingConfig(**config_dict.get("logging", {}))
        return cls(provider=provider_config, logging=logging_config)

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": asdict(self.provider),
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file and applies overrides."""

    def __init__(self, config_path: Path | None = None):
        """Initialise the manager.

        Args:
            config_path: TOML file to read, ``~/.marketbars/config.toml`` when omitted
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config = self._load_config()

    def _load_config(self) -> MarketBarsConfig:
        if not self.config_path.exists():
            return MarketBarsConfig()

        try:
            with open(self.config_path, "rb") as f:
                config_dict = tomllib.load(f)
            return MarketBarsConfig.from_dict(config_dict)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Failed to load config from {path}: {error}", path=str(self.config_path), error=str(e))
            return MarketBarsConfig()

    def get_config(self) -> MarketBarsConfig:
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Deep-merge ``updates`` into the current configuration."""
        config_dict = self.config.to_dict()

        def deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
            for k, v in u.items():
                if isinstance(v, dict):
                    d[k] = deep_update(d.get(k, {}), v)
                else:
                    d[k] = v
            return d

        deep_update(config_dict, updates)
        self.config = MarketBarsConfig.from_dict(config_dict)


def load_config_from_env() -> dict[str, Any]:
    """Collect configuration overrides from ``MARKETBARS_*`` variables."""
    config: dict[str, Any] = {}

    provider_config: dict[str, Any] = {}
    base_url = os.getenv("MARKETBARS_PROVIDER_BASE_URL")
    if base_url:
        provider_config["base_url"] = base_url
    timeout = os.getenv("MARKETBARS_PROVIDER_TIMEOUT")
    if timeout:
        provider_config["timeout"] = float(timeout)
    api_key_env = os.getenv("MARKETBARS_PROVIDER_API_KEY_ENV")
    if api_key_env:
        provider_config["api_key_env"] = api_key_env

    if provider_config:
        config["provider"] = provider_config

    logging_config: dict[str, Any] = {}
    level = os.getenv("MARKETBARS_LOGGING_LEVEL")
    if level:
        logging_config["level"] = level
    log_file = os.getenv("MARKETBARS_LOGGING_FILE")
    if log_file:
        logging_config["file"] = log_file

    if logging_config:
        config["logging"] = logging_config

    return config


def env_credential(name: str = "POLYGON_API_KEY") -> CredentialSource:
    """Return a credential source reading ``name`` from the environment on every call."""

    def read() -> str | None:
        return os.environ.get(name) or None

    return read
