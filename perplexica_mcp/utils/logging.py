"""Logging configuration."""

import logging
import sys

ROOT_LOGGER_NAME = "perplexica_mcp"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the application.

    Log records go to stderr; stdout is reserved for the stdio MCP stream.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Reconfiguring must not stack handlers
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the application namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_tool_call(logger: logging.Logger, tool_name: str, params: dict):
    """
    Log a tool invocation.

    Args:
        logger: Logger instance
        tool_name: Name of the invoked tool
        params: Parameters the tool was called with
    """
    logger.info(f"Tool call: {tool_name}")
    logger.debug(f"Tool params: {params}")
