"""
Tests for frontend/config.py - environment settings.
"""
from config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("API_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_url == "http://localhost:8080/api"
        assert settings.stock_refresh_seconds == 30
        assert settings.token_cookie_name == "tradeagent_token"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("API_URL", "http://api.internal:9000/api")
        monkeypatch.setenv("STOCK_REFRESH_SECONDS", "10")
        settings = Settings(_env_file=None)
        assert settings.api_url == "http://api.internal:9000/api"
        assert settings.stock_refresh_seconds == 10
