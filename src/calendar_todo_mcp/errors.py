"""Structured error types for tool responses."""

from googleapiclient.errors import HttpError
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData
from pydantic import ValidationError

UNEXPECTED_FAILURE = "Unexpected error executing tool"
UNKNOWN_TOOL = "Unknown tool: {name}"
BACKEND_FAILURE = "Google API request failed ({status}): {reason}"
MISSING_CLIENT_SECRETS = (
    "Set GOOGLE_OAUTH_CREDENTIALS to the path of your OAuth client credentials JSON file."
)


class AuthError(RuntimeError):
    """Raised when no usable Google credential can be obtained."""


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def unknown_tool(name: str) -> McpError:
    return invalid_params(UNKNOWN_TOOL.format(name=name))


def format_validation_error(error: ValidationError) -> str:
    """Join every field violation into one message, ``loc: msg; loc: msg``."""
    parts = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue["loc"])
        parts.append(f"{location}: {issue['msg']}" if location else issue["msg"])
    return "; ".join(parts)


def backend_failure(error: HttpError) -> str:
    status = getattr(error.resp, "status", "?")
    reason = getattr(error, "reason", "") or str(error)
    return BACKEND_FAILURE.format(status=status, reason=reason)
