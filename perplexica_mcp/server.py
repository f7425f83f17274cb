"""FastMCP server exposing the Perplexica tools.

This module provides the PerplexicaServer class, which owns the FastMCP
instance, the shared backend client and the service that runs the search
and providers operations.

Example:
    Settings are read from the environment unless passed in;
    PERPLEXICA_API_URL is required:
        >>> settings = AppSettings(perplexica_api_url="http://localhost:3000")
        >>> server = PerplexicaServer(settings)
        >>> server.run(transport="stdio")
"""

import asyncio
from typing import Annotated, NoReturn

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field

from .client import PerplexicaClient
from .config import AppSettings, get_settings
from .models.query import DEFAULT_FOCUS_MODE, SearchRequest
from .service import PerplexicaService
from .utils.errors import PerplexicaError, format_exception
from .utils.logging import get_logger, log_tool_call

logger = get_logger(__name__)

SERVER_INSTRUCTIONS = (
    "A Perplexica API service that performs intelligent searches. Use "
    "perplexica_providers to discover available providers and models, and "
    "perplexica_search to query the Perplexica instance. Required environment "
    "variables: PERPLEXICA_API_URL. Optional environment variables for "
    "defaults: PERPLEXICA_PROVIDER_ID, PERPLEXICA_CHAT_MODEL_KEY, "
    "PERPLEXICA_EMBEDDING_MODEL_KEY."
)


def _raise_tool_error(tool_name: str, error: PerplexicaError) -> NoReturn:
    """Report an operation failure through the MCP error channel."""
    logger.error(f"{tool_name} failed: {format_exception(error)}")
    raise ToolError(error.message) from error


class PerplexicaServer:
    """FastMCP server for a Perplexica instance.

    Attributes:
        settings: Server configuration settings
        mcp: FastMCP server instance
        client: Backend HTTP client shared by all tool calls
        service: Runs the search and providers operations
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        client: PerplexicaClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or PerplexicaClient(self.settings)
        self.service = PerplexicaService(self.settings, self.client)

        self.mcp = FastMCP(name="Perplexica MCP", instructions=SERVER_INSTRUCTIONS)
        self._register_tools()

    def _register_tools(self):
        """Register the Perplexica tools with FastMCP."""

        @self.mcp.tool(
            name="perplexica_search",
            description=(
                "Search using Perplexica API. Provider and model parameters are "
                "optional - the server will use configured defaults unless the "
                "user explicitly specifies otherwise."
            ),
        )
        async def perplexica_search(
            query: Annotated[
                str,
                Field(min_length=1, description="The search query to send to Perplexica"),
            ],
            focus_mode: Annotated[
                str,
                Field(
                    description="The focus mode for search (e.g., 'webSearch', 'academicSearch')"
                ),
            ] = DEFAULT_FOCUS_MODE,
            stream: Annotated[bool, Field(description="Whether to stream response")] = False,
            history: Annotated[
                list[tuple[str, str]] | None,
                Field(description="Chat history as array of [role, message] pairs"),
            ] = None,
            system_instructions: Annotated[
                str | None, Field(description="System instructions for search")
            ] = None,
            provider_id: Annotated[
                str | None,
                Field(
                    description="Provider ID to use. DO NOT SET unless user explicitly "
                    "specifies a provider. Will use default from environment "
                    "variables if omitted."
                ),
            ] = None,
            chat_model_key: Annotated[
                str | None,
                Field(
                    description="Chat model key to use. DO NOT SET unless user explicitly "
                    "specifies a model. Will use default from environment "
                    "variables if omitted."
                ),
            ] = None,
            embedding_model_key: Annotated[
                str | None,
                Field(
                    description="Embedding model key to use. DO NOT SET unless user "
                    "explicitly specifies an embedding model. Will use default "
                    "from environment variables if omitted."
                ),
            ] = None,
        ) -> str:
            request = SearchRequest(
                query=query,
                focus_mode=focus_mode,
                stream=stream,
                history=history,
                system_instructions=system_instructions,
                provider_id=provider_id,
                chat_model_key=chat_model_key,
                embedding_model_key=embedding_model_key,
            )
            log_tool_call(logger, "perplexica_search", request.model_dump())

            try:
                return await self.service.search(request)
            except PerplexicaError as e:
                _raise_tool_error("perplexica_search", e)

        @self.mcp.tool(
            name="perplexica_providers",
            description="Retrieve available providers and their models from Perplexica API",
        )
        async def perplexica_providers() -> list[TextContent]:
            log_tool_call(logger, "perplexica_providers", {})

            try:
                blocks = await self.service.providers()
            except PerplexicaError as e:
                _raise_tool_error("perplexica_providers", e)

            return [TextContent(type="text", text=block) for block in blocks]

    async def start(
        self,
        transport: str = "stdio",
        host: str = "127.0.0.1",
        port: int = 8000,
    ):
        """Start the FastMCP server and release the backend client on exit."""
        logger.info(
            f"Starting Perplexica MCP with transport {transport} "
            f"(backend {self.settings.perplexica_api_url})"
        )

        try:
            if transport == "stdio":
                await self.mcp.run_stdio_async()
            else:
                await self.mcp.run_http_async(transport=transport, host=host, port=port)
        finally:
            await self.close()

    def run(
        self,
        transport: str = "stdio",
        host: str = "127.0.0.1",
        port: int = 8000,
    ):
        """Run the server synchronously."""
        asyncio.run(self.start(transport=transport, host=host, port=port))

    async def close(self):
        """Close the backend client."""
        logger.info("Closing Perplexica client...")
        try:
            await self.client.close()
        except Exception as e:
            logger.error(f"Failed to close Perplexica client: {e}")
