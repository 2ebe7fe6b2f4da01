"""Unit tests for environment-sourced settings."""

import pytest

from app.config import (
    DEFAULT_GEOCODE_CACHE_TTL_MS,
    DEFAULT_PRAYER_CACHE_TTL_MS,
    Settings,
    parse_ttl_ms,
)

ENV_VARS = [
    "GEOCODE_CACHE_TTL_MS",
    "PRAYER_CACHE_TTL_MS",
    "USER_AGENT",
    "ISLAMIC_API_KEY",
    "HTTP_TIMEOUT_SECONDS",
    "SINGLE_FLIGHT",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestParseTtl:
    @pytest.mark.parametrize("raw", [None, "", "abc", "-5", "0", "nan", "inf", "-inf"])
    def test_invalid_values_fall_back(self, raw) -> None:
        assert parse_ttl_ms(raw, 1234) == 1234

    def test_valid_value(self) -> None:
        assert parse_ttl_ms("90000", 1234) == 90000

    def test_fractional_value_truncated(self) -> None:
        assert parse_ttl_ms("1500.7", 1234) == 1500


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        settings = Settings.from_env()
        assert settings.geocode_cache_ttl_ms == DEFAULT_GEOCODE_CACHE_TTL_MS == 3_600_000
        assert settings.prayer_cache_ttl_ms == DEFAULT_PRAYER_CACHE_TTL_MS == 21_600_000
        assert settings.user_agent is None
        assert settings.islamic_api_key is None
        assert settings.single_flight is False
        assert settings.cors_origins == ["*"]

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GEOCODE_CACHE_TTL_MS", "60000")
        monkeypatch.setenv("PRAYER_CACHE_TTL_MS", "120000")
        monkeypatch.setenv("USER_AGENT", "PrayerApp/1.0")
        monkeypatch.setenv("ISLAMIC_API_KEY", "secret")
        monkeypatch.setenv("SINGLE_FLIGHT", "true")
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://prayer.example.com")

        settings = Settings.from_env()
        assert settings.geocode_cache_ttl_ms == 60000
        assert settings.prayer_cache_ttl_ms == 120000
        assert settings.user_agent == "PrayerApp/1.0"
        assert settings.islamic_api_key == "secret"
        assert settings.single_flight is True
        assert settings.cors_origins == ["http://localhost:5173", "https://prayer.example.com"]

    @pytest.mark.parametrize("raw", ["-5", "abc"])
    def test_invalid_ttl_uses_default(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("PRAYER_CACHE_TTL_MS", raw)
        monkeypatch.setenv("GEOCODE_CACHE_TTL_MS", raw)
        settings = Settings.from_env()
        assert settings.prayer_cache_ttl_ms == DEFAULT_PRAYER_CACHE_TTL_MS
        assert settings.geocode_cache_ttl_ms == DEFAULT_GEOCODE_CACHE_TTL_MS

    def test_empty_user_agent_treated_as_missing(self, monkeypatch) -> None:
        monkeypatch.setenv("USER_AGENT", "")
        assert Settings.from_env().user_agent is None

    def test_invalid_timeout_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "soon")
        assert Settings.from_env().http_timeout == 10.0
