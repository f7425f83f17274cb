"""Application settings loaded from the environment."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_TRANSPORTS = {"stdio", "streamable-http", "sse"}


class AppSettings(BaseSettings):
    """Server settings.

    Field names match the environment variables case-insensitively, so
    ``perplexica_api_url`` is read from ``PERPLEXICA_API_URL``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # Backend
    perplexica_api_url: str = Field(
        ..., min_length=1, description="Base URL of the Perplexica instance"
    )
    perplexica_timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for a whole backend call"
    )
    perplexica_max_connections: int = Field(
        default=10, ge=1, description="Maximum idle keep-alive connections"
    )

    # Defaults for the search identifiers
    perplexica_provider_id: str | None = Field(
        default=None, description="Default provider id"
    )
    perplexica_chat_model_key: str | None = Field(
        default=None, description="Default chat model key"
    )
    perplexica_embedding_model_key: str | None = Field(
        default=None, description="Default embedding model key"
    )

    # Server configuration
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    transport: str = Field(default="stdio", description="Transport mode")

    @field_validator("perplexica_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoint paths can be appended."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport value."""
        if v.lower() not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport: {v}. Must be one of {VALID_TRANSPORTS}"
            )
        return v.lower()

    @property
    def search_url(self) -> str:
        return f"{self.perplexica_api_url}/api/search"

    @property
    def providers_url(self) -> str:
        return f"{self.perplexica_api_url}/api/providers"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
