"""Unit tests for settings."""
from types import SimpleNamespace

import pytest

from healthrisk.infrastructure import config
from healthrisk.infrastructure.config import DEFAULT_HISTORY_LIMIT, Settings, get_secret


@pytest.fixture(autouse=True)
def env_only(monkeypatch):
    """Read settings from environment variables only."""
    monkeypatch.setattr(config, "_HAS_STREAMLIT", False)
    for name in ("RISK_CATALOG_PATH", "LOG_LEVEL", "RISK_HISTORY_LIMIT"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test environment-backed settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.risk_catalog_path is None
        assert settings.log_level == "INFO"
        assert settings.history_limit == DEFAULT_HISTORY_LIMIT

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("RISK_CATALOG_PATH", "/etc/healthrisk/catalog.json")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("RISK_HISTORY_LIMIT", "7")
        settings = Settings()
        assert settings.risk_catalog_path == "/etc/healthrisk/catalog.json"
        assert settings.log_level == "DEBUG"
        assert settings.history_limit == 7

    def test_empty_catalog_path_means_builtin(self, monkeypatch):
        monkeypatch.setenv("RISK_CATALOG_PATH", "")
        assert Settings().risk_catalog_path is None

    def test_invalid_history_limit(self, monkeypatch):
        monkeypatch.setenv("RISK_HISTORY_LIMIT", "lots")
        assert Settings().history_limit == DEFAULT_HISTORY_LIMIT
        monkeypatch.setenv("RISK_HISTORY_LIMIT", "-3")
        assert Settings().history_limit == DEFAULT_HISTORY_LIMIT

    def test_get_secret_default(self):
        assert get_secret("NOT_A_REAL_SETTING", "fallback") == "fallback"


class BrokenSecrets:
    def get(self, name):
        raise FileNotFoundError("No secrets.toml found")


class TestStreamlitSecrets:
    """Test lookups through Streamlit secrets."""

    @pytest.fixture
    def secrets(self, monkeypatch):
        monkeypatch.setattr(config, "_HAS_STREAMLIT", True)
        store = {}
        monkeypatch.setattr(config, "st", SimpleNamespace(secrets=store), raising=False)
        return store

    def test_secret_wins_over_environment(self, secrets, monkeypatch):
        secrets["LOG_LEVEL"] = "warning"
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "WARNING"

    def test_secret_value_is_stringified(self, secrets):
        secrets["RISK_HISTORY_LIMIT"] = 12
        assert get_secret("RISK_HISTORY_LIMIT") == "12"
        assert Settings().history_limit == 12

    def test_missing_secret_falls_back_to_environment(self, secrets, monkeypatch):
        monkeypatch.setenv("RISK_CATALOG_PATH", "/tmp/catalog.json")
        assert Settings().risk_catalog_path == "/tmp/catalog.json"

    def test_unconfigured_secrets_fall_back_to_environment(self, monkeypatch):
        monkeypatch.setattr(config, "_HAS_STREAMLIT", True)
        monkeypatch.setattr(config, "st", SimpleNamespace(secrets=BrokenSecrets()), raising=False)
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert Settings().log_level == "ERROR"
