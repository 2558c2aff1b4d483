"""Tests for environment-driven settings."""

from forum_admin.config import get_settings, reset_settings_cache


def test_reset_settings_cache_reloads_environment(monkeypatch):
    original = get_settings()
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:4200, https://admin.example.com")

    try:
        assert get_settings() is original
        reset_settings_cache()
        reloaded = get_settings()
        assert reloaded is not original
        assert reloaded.cors_origin_list == [
            "http://localhost:4200",
            "https://admin.example.com",
        ]
    finally:
        monkeypatch.delenv("CORS_ORIGINS")
        reset_settings_cache()


def test_blank_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "   ")

    try:
        reset_settings_cache()
        assert get_settings().app_timezone == "UTC"
    finally:
        monkeypatch.setenv("APP_TIMEZONE", "UTC")
        reset_settings_cache()
