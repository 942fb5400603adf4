"""Configuration management module."""

from marketbars.core.config.settings import (
    ConfigManager,
    CredentialSource,
    LoggingConfig,
    MarketBarsConfig,
    ProviderConfig,
    env_credential,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "CredentialSource",
    "MarketBarsConfig",
    "LoggingConfig",
    "ProviderConfig",
    "env_credential",
    "load_config_from_env",
]
