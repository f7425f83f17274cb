"""Rendering of parsed Perplexica responses into display text."""

from ..models.results import ProvidersResult, SearchResult
from ..utils.errors import MalformedResponseError, SerializationFailureError

NO_SOURCES_LINE = "No sources found."


def format_search_markdown(result: SearchResult) -> str:
    """Render a search result as a Summary section followed by Sources.

    Sources keep their original order; each title is followed by its URL on
    an indented line.

    Raises:
        MalformedResponseError: if the result cannot be formatted
    """
    try:
        parts = [f"## Summary\n\n{result.message}\n\n## Sources\n\n"]

        if not result.sources:
            parts.append(f"{NO_SOURCES_LINE}\n")
        else:
            for source in result.sources:
                parts.append(
                    f"- {source.metadata.title}\n  - {source.metadata.url}\n"
                )

        return "".join(parts)
    except (TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(
            "Failed to format markdown response", original_error=e
        ) from e


def format_providers_blocks(result: ProvidersResult) -> list[str]:
    """Render the providers listing as separate text blocks.

    The first block is a count line, then one block per provider with model
    counts, then the full response as pretty-printed JSON.

    Raises:
        SerializationFailureError: if the JSON block cannot be produced
    """
    blocks = [f"Found {len(result.providers)} providers available:"]

    for provider in result.providers:
        blocks.append(
            f"\n## {provider.name}\n"
            f"ID: {provider.id}\n"
            f"Chat Models: {len(provider.chat_models)}\n"
            f"Embedding Models: {len(provider.embedding_models)}"
        )

    try:
        complete_json = result.to_pretty_json()
    except Exception as e:
        raise SerializationFailureError(
            f"Failed to serialize providers data: {e}", original_error=e
        ) from e

    blocks.append(f"\n\n## Complete Response (JSON)\n\n```json\n{complete_json}\n```")
    return blocks
