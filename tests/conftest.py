"""Test configuration for Perplexica MCP."""

import pytest

from perplexica_mcp.config import AppSettings, get_settings

BASE_URL = "http://perplexica.test"
SEARCH_URL = f"{BASE_URL}/api/search"
PROVIDERS_URL = f"{BASE_URL}/api/providers"

PERPLEXICA_ENV_VARS = (
    "PERPLEXICA_API_URL",
    "PERPLEXICA_PROVIDER_ID",
    "PERPLEXICA_CHAT_MODEL_KEY",
    "PERPLEXICA_EMBEDDING_MODEL_KEY",
    "PERPLEXICA_TIMEOUT",
    "PERPLEXICA_MAX_CONNECTIONS",
    "TRANSPORT",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove Perplexica variables so tests never see the real environment."""
    for name in PERPLEXICA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    # Clear lru_cache so settings are rebuilt from the patched environment
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Settings with a backend URL and no identifier defaults."""
    return AppSettings(perplexica_api_url=BASE_URL, _env_file=None)


@pytest.fixture
def settings_with_defaults():
    """Settings with all three identifier defaults configured."""
    return AppSettings(
        perplexica_api_url=BASE_URL,
        perplexica_provider_id="env-provider",
        perplexica_chat_model_key="env-chat",
        perplexica_embedding_model_key="env-embed",
        _env_file=None,
    )


@pytest.fixture
def search_response_data():
    """A backend search response with two sources."""
    return {
        "message": "This is a test search response with citations [1][2].",
        "sources": [
            {
                "pageContent": "Test content 1",
                "metadata": {"title": "Test Title 1", "url": "https://example.com/1"},
            },
            {
                "pageContent": "Test content 2",
                "metadata": {"title": "Test Title 2", "url": "https://example.com/2"},
            },
        ],
    }


@pytest.fixture
def providers_response_data():
    """A backend providers response with one provider."""
    return {
        "providers": [
            {
                "id": "test-provider-1",
                "name": "Test Provider 1",
                "chatModels": [{"name": "GPT 4", "key": "gpt-4"}],
                "embeddingModels": [
                    {
                        "name": "Text Embedding 3 Large",
                        "key": "text-embedding-3-large",
                    }
                ],
            }
        ]
    }
