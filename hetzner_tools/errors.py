"""
Errors - Exception types and the API error normalizer.

Two kinds of failure exist:
- ConfigurationError: the API token is missing. Fatal, never normalized.
- Everything else raised while serving a tool call. These are turned into a
  single human-readable line by ``handle_api_error`` at the tool boundary.
  A provider payload that fails to parse goes through
  ``handle_response_error`` instead.
"""

from enum import Enum

import httpx
from pydantic import ValidationError

from .models import APIErrorBody

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "HetznerToolsError",
    "UnknownToolError",
    "classify_error",
    "handle_api_error",
    "handle_response_error",
]


class HetznerToolsError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(HetznerToolsError):
    """Raised on first use when no API token is configured."""


class UnknownToolError(HetznerToolsError, KeyError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class ErrorCategory(str, Enum):
    """Per-call failure categories."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    HTTP = "http"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


_STATUS_CATEGORIES = {
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.AUTHORIZATION,
    404: ErrorCategory.NOT_FOUND,
    409: ErrorCategory.CONFLICT,
    422: ErrorCategory.VALIDATION,
    429: ErrorCategory.RATE_LIMIT,
    503: ErrorCategory.UPSTREAM_UNAVAILABLE,
}


def classify_error(error: BaseException) -> ErrorCategory:
    """Map any failure to exactly one category."""
    if isinstance(error, httpx.HTTPStatusError):
        return _STATUS_CATEGORIES.get(error.response.status_code, ErrorCategory.HTTP)
    if isinstance(error, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT
    if isinstance(error, httpx.ConnectError):
        return ErrorCategory.UNREACHABLE
    if isinstance(error, ValidationError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


def _provider_message(response: httpx.Response) -> str | None:
    """Extract ``error.message`` from a Hetzner error body, if any."""
    try:
        body = APIErrorBody.model_validate(response.json())
    except ValueError:
        # Covers both undecodable JSON and a body without error.code/message
        return None
    return body.error.message or None


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "input"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


def handle_api_error(error: BaseException) -> str:
    """Turn a failure into one human-readable line.

    Args:
        error: Exception raised by the connector or a tool

    Returns:
        Message starting with ``Error:``
    """
    category = classify_error(error)

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        detail = _provider_message(error.response)

        if category is ErrorCategory.AUTHENTICATION:
            return "Error: Authentication failed. Please check your HETZNER_API_TOKEN."
        if category is ErrorCategory.AUTHORIZATION:
            detail = detail or "You don't have access to this resource."
            return f"Error: Permission denied. {detail}"
        if category is ErrorCategory.NOT_FOUND:
            return f"Error: Resource not found. {detail or 'Please check the ID is correct.'}"
        if category is ErrorCategory.CONFLICT:
            return f"Error: Conflict. {detail or 'The resource is in a conflicting state.'}"
        if category is ErrorCategory.VALIDATION:
            return f"Error: Invalid request. {detail or 'Please check your parameters.'}"
        if category is ErrorCategory.RATE_LIMIT:
            return "Error: Rate limit exceeded. Please wait a moment before making more requests."
        if category is ErrorCategory.UPSTREAM_UNAVAILABLE:
            return "Error: Hetzner API is temporarily unavailable. Please try again later."
        return f"Error: API request failed ({status}). {detail or str(error)}"

    if category is ErrorCategory.TIMEOUT:
        return "Error: Request timed out. Please try again."
    if category is ErrorCategory.UNREACHABLE:
        return "Error: Could not connect to Hetzner API. Please check your internet connection."
    if category is ErrorCategory.VALIDATION:
        return f"Error: Invalid input. {_validation_message(error)}"

    message = str(error)
    if message:
        return f"Error: {message}"
    return "Error: An unexpected error occurred."


def handle_response_error(error: ValidationError) -> str:
    """Message for a provider payload that does not match its model."""
    return f"Error: Unexpected response from Hetzner API. {_validation_message(error)}"
