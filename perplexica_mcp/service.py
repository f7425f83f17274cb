"""The search and providers operations.

Both operations are single pass: build the request, make one backend call,
render the result. Any failure is raised as a PerplexicaError subclass.
"""

from .client import PerplexicaClient
from .config.settings import AppSettings
from .models.query import BackendSearchPayload, SearchRequest
from .resolver import resolve_identifiers
from .result_processing.formatter import format_providers_blocks, format_search_markdown
from .utils.logging import get_logger

logger = get_logger(__name__)


class PerplexicaService:
    """Runs tool operations against a Perplexica backend."""

    def __init__(self, settings: AppSettings, client: PerplexicaClient):
        self.settings = settings
        self.client = client

    async def search(self, request: SearchRequest) -> str:
        """Search and render the answer as markdown."""
        identifiers = resolve_identifiers(request, self.settings)
        payload = BackendSearchPayload.build(request, identifiers)

        logger.info(
            f"Searching with provider={identifiers.provider_id} "
            f"chat_model={identifiers.chat_model_key} focus_mode={request.focus_mode}"
        )
        result = await self.client.search(payload)

        markdown = format_search_markdown(result)
        logger.debug(
            f"Rendered search answer with {len(result.sources)} sources "
            f"({len(markdown)} chars)"
        )
        return markdown

    async def providers(self) -> list[str]:
        """List backend providers as text blocks."""
        result = await self.client.list_providers()
        logger.info(f"Perplexica reported {len(result.providers)} providers")
        return format_providers_blocks(result)
