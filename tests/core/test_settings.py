"""Tests for core.settings module.

Covers:
- TransmuteSettings instantiation with defaults
- Environment variable override with the TRANSMUTE_ prefix
- log_level validation
- get_settings caching
"""

import pytest
from pydantic import ValidationError

from transmute.core.settings import TransmuteSettings, get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """No stray TRANSMUTE_* variables or .env file from the developer machine."""
    for name in ("TRANSMUTE_LOG_LEVEL", "TRANSMUTE_LOG_JSON", "TRANSMUTE_SERVICE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestTransmuteSettingsDefaults:
    def test_default_log_level(self):
        assert TransmuteSettings().log_level == "INFO"

    def test_default_log_json_unset(self):
        assert TransmuteSettings().log_json is None

    def test_default_service(self):
        assert TransmuteSettings().service == "transmute"


class TestTransmuteSettingsEnvOverride:
    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_LOG_LEVEL", "debug")
        assert TransmuteSettings().log_level == "DEBUG"

    def test_log_json_from_env(self, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_LOG_JSON", "true")
        assert TransmuteSettings().log_json is True

    def test_service_from_env(self, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_SERVICE", "billing")
        assert TransmuteSettings().service == "billing"

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert TransmuteSettings().log_level == "INFO"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("TRANSMUTE_SERVICE=from-dotenv\nUNRELATED=1\n")
        assert TransmuteSettings().service == "from-dotenv"


class TestTransmuteSettingsValidation:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            TransmuteSettings(log_level="LOUD")

    def test_empty_service(self):
        with pytest.raises(ValidationError):
            TransmuteSettings(service="")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TRANSMUTE_SERVICE", "changed")
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().service == "changed"
