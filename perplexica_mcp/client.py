"""HTTP client for the Perplexica backend.

One ``httpx.AsyncClient`` is shared by every tool invocation. Each call
sends exactly one request and maps every failure onto the error taxonomy
in ``utils.errors``; nothing is retried.
"""

import asyncio
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config.settings import AppSettings
from .models.query import BackendSearchPayload
from .models.results import ProvidersResult, SearchResult
from .utils.errors import (
    MalformedResponseError,
    UpstreamError,
    UpstreamUnreachableError,
    describe_exception,
)
from .utils.logging import get_logger

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

UNREADABLE_BODY = "Failed to read error response"


class PerplexicaClient:
    """Perplexica API client."""

    def __init__(
        self, settings: AppSettings, client: httpx.AsyncClient | None = None
    ):
        self.search_url = settings.search_url
        self.providers_url = settings.providers_url
        self.timeout = settings.perplexica_timeout
        self.client = client or httpx.AsyncClient(
            timeout=settings.perplexica_timeout,
            follow_redirects=True,
            limits=httpx.Limits(
                max_keepalive_connections=settings.perplexica_max_connections
            ),
        )

    async def search(self, payload: BackendSearchPayload) -> SearchResult:
        """Send a search and parse the answer with its sources."""
        content = await self._request(
            "search", "POST", self.search_url, json=payload.to_json_body()
        )
        return self._parse(SearchResult, content, "search")

    async def list_providers(self) -> ProvidersResult:
        """Fetch the providers and models configured on the backend."""
        content = await self._request("providers", "GET", self.providers_url)
        return self._parse(ProvidersResult, content, "providers")

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> bytes:
        """Send one request and return the body of a success response.

        The whole exchange, including reading the body, is bounded by the
        configured timeout.
        """
        request = self.client.build_request(method, url, **kwargs)
        logger.debug(f"{method} {url}")

        try:
            return await asyncio.wait_for(
                self._exchange(operation, request), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"{operation.capitalize()} request to {url} timed out "
                f"after {self.timeout} seconds"
            )
            raise UpstreamUnreachableError(
                f"{operation.capitalize()} request failed: "
                f"request timed out after {self.timeout} seconds",
                original_error=e,
                details={"url": url, "timeout_seconds": self.timeout},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{operation.capitalize()} request to {url} failed: {e!r}")
            raise UpstreamUnreachableError(
                f"{operation.capitalize()} request failed: {describe_exception(e)}",
                original_error=e,
                details={"url": url},
            ) from e

    async def _exchange(self, operation: str, request: httpx.Request) -> bytes:
        response = await self.client.send(request, stream=True)

        try:
            if not response.is_success:
                body = await self._read_error_body(response)
                status = f"{response.status_code} {response.reason_phrase}".strip()
                logger.error(
                    f"Perplexica {operation} API returned {status}: {body[:200]}"
                )
                raise UpstreamError(
                    f"Perplexica {operation} API error (status {status}): {body}",
                    status_code=response.status_code,
                    body=body,
                )

            return await response.aread()
        finally:
            await response.aclose()

    @staticmethod
    async def _read_error_body(response: httpx.Response) -> str:
        # Best effort: a body that cannot be read must not mask the status.
        try:
            await response.aread()
            return response.text
        except httpx.HTTPError as e:
            logger.warning(f"Could not read error response body: {e!r}")
            return UNREADABLE_BODY

    @staticmethod
    def _parse(model: type[ResultT], content: bytes, operation: str) -> ResultT:
        try:
            return model.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"Unexpected {operation} response shape: {e}")
            raise MalformedResponseError(
                f"Failed to parse {operation} response as JSON: {e}",
                original_error=e,
            ) from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
