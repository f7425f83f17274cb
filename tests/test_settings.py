"""Tests for the settings module."""

import pytest
from pydantic import ValidationError

from perplexica_mcp.config.settings import AppSettings, get_settings


class TestAppSettings:
    """Test AppSettings class."""

    def test_default_values(self, monkeypatch):
        """Test default values when only the URL is set."""
        monkeypatch.setenv("PERPLEXICA_API_URL", "http://localhost:3000")

        settings = AppSettings(_env_file=None)

        assert settings.perplexica_api_url == "http://localhost:3000"
        assert settings.perplexica_timeout == 30.0
        assert settings.perplexica_max_connections == 10
        assert settings.perplexica_provider_id is None
        assert settings.perplexica_chat_model_key is None
        assert settings.perplexica_embedding_model_key is None
        assert settings.transport == "stdio"
        assert settings.log_level == "INFO"

    def test_environment_variable_loading(self, monkeypatch):
        """Test loading settings from environment variables."""
        monkeypatch.setenv("PERPLEXICA_API_URL", "http://localhost:3000/")
        monkeypatch.setenv("PERPLEXICA_PROVIDER_ID", "openai")
        monkeypatch.setenv("PERPLEXICA_CHAT_MODEL_KEY", "gpt-4o")
        monkeypatch.setenv("PERPLEXICA_EMBEDDING_MODEL_KEY", "text-embedding-3-small")
        monkeypatch.setenv("PERPLEXICA_TIMEOUT", "12.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("TRANSPORT", "streamable-http")
        monkeypatch.setenv("PORT", "9000")

        settings = AppSettings(_env_file=None)

        assert settings.perplexica_api_url == "http://localhost:3000"
        assert settings.perplexica_provider_id == "openai"
        assert settings.perplexica_chat_model_key == "gpt-4o"
        assert settings.perplexica_embedding_model_key == "text-embedding-3-small"
        assert settings.perplexica_timeout == 12.5
        assert settings.log_level == "DEBUG"
        assert settings.transport == "streamable-http"
        assert settings.port == 9000

    def test_endpoint_urls(self):
        """Test that endpoint URLs are built from a normalized base URL."""
        settings = AppSettings(perplexica_api_url="https://search.example.com//", _env_file=None)

        assert settings.search_url == "https://search.example.com/api/search"
        assert settings.providers_url == "https://search.example.com/api/providers"

    def test_api_url_required(self):
        """Test that a missing base URL fails validation."""
        with pytest.raises(ValidationError) as exc_info:
            AppSettings(_env_file=None)

        assert exc_info.value.errors()[0]["loc"] == ("perplexica_api_url",)

    def test_invalid_values(self):
        """Test validation of log level, transport and timeout."""
        with pytest.raises(ValidationError):
            AppSettings(perplexica_api_url="http://x", log_level="LOUD", _env_file=None)
        with pytest.raises(ValidationError):
            AppSettings(perplexica_api_url="http://x", transport="carrier-pigeon", _env_file=None)
        with pytest.raises(ValidationError):
            AppSettings(perplexica_api_url="http://x", perplexica_timeout=0, _env_file=None)


def test_get_settings_is_cached(monkeypatch):
    """Test that get_settings returns one cached instance."""
    monkeypatch.setenv("PERPLEXICA_API_URL", "http://localhost:3000")

    assert get_settings() is get_settings()
