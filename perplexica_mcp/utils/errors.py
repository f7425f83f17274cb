"""Error handling utilities.

This module defines the exception hierarchy for the Perplexica MCP server.
Every failure an operation can report is a subclass of PerplexicaError and
carries an ErrorKind. At the tool boundary only the message is sent to
the client, as a fastmcp ToolError.
"""

import traceback
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of failure an operation can report."""

    MISSING_CONFIGURATION = "MissingConfiguration"
    UPSTREAM_UNREACHABLE = "UpstreamUnreachable"
    UPSTREAM_ERROR = "UpstreamError"
    MALFORMED_RESPONSE = "MalformedResponse"
    SERIALIZATION_FAILURE = "SerializationFailure"


class PerplexicaError(Exception):
    """Base class for all errors reported by the server.

    Subclasses set ``kind``. The message is self-descriptive so it can be
    shown to the caller as is.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM_ERROR

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation.

        Returns:
            A dictionary containing error details suitable for logging
        """
        result = {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        return result


class MissingConfigurationError(PerplexicaError):
    """Raised when an identifier is neither supplied nor configured."""

    kind = ErrorKind.MISSING_CONFIGURATION

    def __init__(self, field_name: str, env_var: str, message: str | None = None, **kwargs):
        """Initialize a missing configuration error.

        Args:
            field_name: The tool parameter that was not supplied
            env_var: The environment variable that provides its default
            message: Error message (defaults to a standard message)
            **kwargs: Additional arguments passed to PerplexicaError
        """
        details = kwargs.pop("details", {})
        details["field"] = field_name
        details["env_var"] = env_var

        message = message or (
            f"Missing {field_name}. Set either the {field_name} parameter "
            f"or {env_var} environment variable"
        )
        self.field_name = field_name
        self.env_var = env_var
        super().__init__(message, details=details, **kwargs)


class UpstreamUnreachableError(PerplexicaError):
    """Raised when the backend cannot be reached or does not answer in time."""

    kind = ErrorKind.UPSTREAM_UNREACHABLE


class UpstreamError(PerplexicaError):
    """Raised when the backend answers with a non-success status."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        **kwargs,
    ):
        """Initialize an upstream error.

        Args:
            message: Error message
            status_code: HTTP status returned by the backend
            body: Raw response body, or a placeholder if it could not be read
            **kwargs: Additional arguments passed to PerplexicaError
        """
        details = kwargs.pop("details", {})

        if status_code is not None:
            details["status_code"] = status_code
        if body is not None:
            details["body"] = body

        self.status_code = status_code
        self.body = body
        super().__init__(message, details=details, **kwargs)


class MalformedResponseError(PerplexicaError):
    """Raised when a success response does not have the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE


class SerializationFailureError(PerplexicaError):
    """Raised when a parsed result cannot be re-serialized for output."""

    kind = ErrorKind.SERIALIZATION_FAILURE


# Utility functions


def describe_exception(e: BaseException) -> str:
    """Return the exception text, falling back to its class name."""
    return str(e) or e.__class__.__name__


def format_exception(e: Exception) -> dict[str, Any]:
    """Format an exception for structured logging.

    Args:
        e: The exception to format

    Returns:
        A dictionary containing error details suitable for logging
    """
    if isinstance(e, PerplexicaError):
        result = e.to_dict()
        if e.original_error is not None:
            result["original_error"] = describe_exception(e.original_error)
        return result

    return {
        "error_type": e.__class__.__name__,
        "message": str(e),
        "traceback": traceback.format_exc(),
    }
