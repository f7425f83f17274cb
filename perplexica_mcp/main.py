"""Main entry point for the Perplexica MCP server."""

import argparse
import logging
import os
import sys

from pydantic import ValidationError

from .config import get_settings
from .config.settings import VALID_TRANSPORTS
from .server import PerplexicaServer
from .utils.logging import configure_logging

# (command-line option, environment variable)
ENV_OPTIONS = (
    ("transport", "TRANSPORT"),
    ("host", "HOST"),
    ("port", "PORT"),
    ("log_level", "LOG_LEVEL"),
    ("api_url", "PERPLEXICA_API_URL"),
    ("provider_id", "PERPLEXICA_PROVIDER_ID"),
    ("chat_model_key", "PERPLEXICA_CHAT_MODEL_KEY"),
    ("embedding_model_key", "PERPLEXICA_EMBEDDING_MODEL_KEY"),
)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Perplexica MCP server")
    parser.add_argument(
        "--transport",
        choices=sorted(VALID_TRANSPORTS),
        help="Transport protocol",
    )
    parser.add_argument(
        "--host",
        help="Host address to bind server (for HTTP transports)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to bind server (for HTTP transports)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    parser.add_argument("--api-url", help="Base URL of the Perplexica instance")
    parser.add_argument("--provider-id", help="Default provider id")
    parser.add_argument("--chat-model-key", help="Default chat model key")
    parser.add_argument("--embedding-model-key", help="Default embedding model key")

    return parser.parse_args(argv)


def apply_args_to_env(args: argparse.Namespace) -> None:
    """Export the provided command-line options as environment variables."""
    for option, env_var in ENV_OPTIONS:
        value = getattr(args, option, None)
        if value is not None:
            os.environ[env_var] = str(value)


def main(argv=None):
    """Run the Perplexica MCP server."""
    args = parse_args(argv)
    apply_args_to_env(args)

    get_settings.cache_clear()
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
        if any(err["loc"] == ("perplexica_api_url",) for err in e.errors()):
            logging.getLogger("perplexica_mcp").error(
                "PERPLEXICA_API_URL environment variable must be set"
            )
        else:
            logging.getLogger("perplexica_mcp").error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)

    server = PerplexicaServer(settings)
    server.run(
        transport=settings.transport,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
