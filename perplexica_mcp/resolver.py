"""Resolution of the optional provider and model identifiers.

A search needs a provider id, a chat model key and an embedding model key.
Each may be passed by the caller; otherwise the default loaded from the
environment at startup is used. The resolver never reads the environment
itself, so it is a pure function of its inputs.
"""

from .config.settings import AppSettings
from .models.query import ResolvedIdentifiers, SearchRequest
from .utils.errors import MissingConfigurationError

# (tool parameter, environment variable, settings attribute), in resolution order
IDENTIFIER_SOURCES: tuple[tuple[str, str, str], ...] = (
    ("provider_id", "PERPLEXICA_PROVIDER_ID", "perplexica_provider_id"),
    ("chat_model_key", "PERPLEXICA_CHAT_MODEL_KEY", "perplexica_chat_model_key"),
    (
        "embedding_model_key",
        "PERPLEXICA_EMBEDDING_MODEL_KEY",
        "perplexica_embedding_model_key",
    ),
)


def resolve_identifier(
    param_value: str | None, default: str | None, env_var: str, field_name: str
) -> str:
    """Return the caller's value, else the configured default.

    An empty string supplied by the caller is returned as is.

    Raises:
        MissingConfigurationError: if neither value is present
    """
    if param_value is not None:
        return param_value
    if default is not None:
        return default
    raise MissingConfigurationError(field_name=field_name, env_var=env_var)


def resolve_identifiers(
    request: SearchRequest, settings: AppSettings
) -> ResolvedIdentifiers:
    """Resolve all three identifiers, failing on the first missing one."""
    resolved = {}
    for field_name, env_var, setting_name in IDENTIFIER_SOURCES:
        resolved[field_name] = resolve_identifier(
            getattr(request, field_name),
            getattr(settings, setting_name),
            env_var,
            field_name,
        )
    return ResolvedIdentifiers(**resolved)
