"""
Tests for configuration management.

Covers file loading, environment overrides and the environment-backed
credential source.
"""

from pathlib import Path

import pytest

from marketbars.core.config import (
    ConfigManager,
    LoggingConfig,
    MarketBarsConfig,
    ProviderConfig,
    env_credential,
    load_config_from_env,
)


class TestProviderConfig:
    """Test ProviderConfig dataclass."""

    def test_defaults(self):
        config = ProviderConfig()

        assert config.base_url == "https://api.polygon.io"
        assert config.api_key_env == "POLYGON_API_KEY"
        assert config.timeout is None

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"base_url": ""}, "base_url cannot be empty"),
            ({"api_key_env": ""}, "api_key_env cannot be empty"),
            ({"timeout": 0}, "timeout must be positive"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ProviderConfig(**kwargs)


class TestMarketBarsConfig:
    """Test dictionary conversion."""

    def test_round_trip(self):
        config = MarketBarsConfig(
            provider=ProviderConfig(timeout=5.0),
            logging=LoggingConfig(level="DEBUG"),
        )

        assert MarketBarsConfig.from_dict(config.to_dict()) == config

    def test_partial_dict_uses_defaults(self):
        config = MarketBarsConfig.from_dict({"logging": {"level": "WARNING"}})

        assert config.logging.level == "WARNING"
        assert config.provider == ProviderConfig()


class TestConfigManager:
    """Test TOML loading and updates."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        manager = ConfigManager(tmp_path / "absent.toml")

        assert manager.get_config() == MarketBarsConfig()

    def test_loads_toml(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[provider]\nbase_url = "https://polygon.internal"\ntimeout = 12.5\n\n'
            '[logging]\nlevel = "DEBUG"\n',
            encoding="utf-8",
        )

        config = ConfigManager(path).get_config()

        assert config.provider.base_url == "https://polygon.internal"
        assert config.provider.timeout == 12.5
        assert config.logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "contents",
        ["not = [valid", '[provider]\nunknown_key = 1\n', '[provider]\ntimeout = -1\n'],
    )
    def test_bad_file_falls_back_to_defaults(self, tmp_path: Path, contents: str):
        path = tmp_path / "config.toml"
        path.write_text(contents, encoding="utf-8")

        assert ConfigManager(path).get_config() == MarketBarsConfig()

    def test_update_config_deep_merges(self, tmp_path: Path):
        manager = ConfigManager(tmp_path / "absent.toml")

        manager.update_config(provider={"timeout": 3.0})

        config = manager.get_config()
        assert config.provider.timeout == 3.0
        assert config.provider.base_url == "https://api.polygon.io"


class TestEnvironment:
    """Test environment based configuration."""

    def test_load_config_from_env(self, monkeypatch):
        monkeypatch.setenv("MARKETBARS_PROVIDER_BASE_URL", "https://proxy.example.test")
        monkeypatch.setenv("MARKETBARS_PROVIDER_TIMEOUT", "7")
        monkeypatch.setenv("MARKETBARS_PROVIDER_API_KEY_ENV", "MY_KEY")
        monkeypatch.setenv("MARKETBARS_LOGGING_LEVEL", "ERROR")
        monkeypatch.setenv("MARKETBARS_LOGGING_FILE", "/tmp/marketbars.log")

        assert load_config_from_env() == {
            "provider": {
                "base_url": "https://proxy.example.test",
                "timeout": 7.0,
                "api_key_env": "MY_KEY",
            },
            "logging": {"level": "ERROR", "file": "/tmp/marketbars.log"},
        }

    def test_load_config_from_env_empty(self, monkeypatch):
        for name in (
            "MARKETBARS_PROVIDER_BASE_URL",
            "MARKETBARS_PROVIDER_TIMEOUT",
            "MARKETBARS_PROVIDER_API_KEY_ENV",
            "MARKETBARS_LOGGING_LEVEL",
            "MARKETBARS_LOGGING_FILE",
        ):
            monkeypatch.delenv(name, raising=False)

        assert load_config_from_env() == {}

    def test_env_credential_reads_on_every_call(self, monkeypatch):
        monkeypatch.delenv("POLYGON_API_KEY", raising=False)
        source = env_credential()

        assert source() is None
        monkeypatch.setenv("POLYGON_API_KEY", "abc")
        assert source() == "abc"
        monkeypatch.setenv("POLYGON_API_KEY", "")
        assert source() is None
