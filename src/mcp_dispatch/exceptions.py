"""Custom exceptions for mcp_dispatch."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error kinds the dispatcher attaches to a failed request."""

    TOOL_NOT_FOUND = "tool_not_found"
    PROMPT_NOT_FOUND = "prompt_not_found"
    MISSING_REQUIRED_ARGUMENTS = "missing_required_arguments"
    INVALID_SCHEMA = "invalid_schema"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


class MCPDispatchError(Exception):
    """Base error for mcp_dispatch."""


class HandlerError(MCPDispatchError):
    """A request failed while its handler was running.

    Every failure that leaves the dispatcher is one of these. ``error_type`` is
    an :class:`ErrorKind` for the built-in failures; custom method handlers may
    raise it with any string kind of their own.

    Attributes:
        error_type: The kind of failure, e.g. ``ErrorKind.TOOL_NOT_FOUND``
        request: The params of the request that failed
        original_error: The exception that caused this one, if any
    """

    def __init__(
        self,
        message: str,
        request: Any = None,
        error_type: ErrorKind | str = ErrorKind.INTERNAL_ERROR,
        original_error: BaseException | None = None,
    ):
        super().__init__(message)
        self.request = request
        self.error_type = error_type
        self.original_error = original_error


class MethodAlreadyDefinedError(MCPDispatchError):
    """A custom method was registered under a name that already has a handler."""

    def __init__(self, method_name: str):
        super().__init__(f"Method {method_name} already defined")
        self.method_name = method_name


class MissingRequiredCapabilityError(MCPDispatchError):
    """The server did not negotiate the capability a method needs."""

    def __init__(self, method: str, capability: str):
        super().__init__(f"Server does not support {capability} (required for {method})")
        self.method = method
        self.capability = capability


class InputSchemaValidationError(MCPDispatchError):
    """Tool arguments do not conform to the tool's input schema."""


class PromptArgumentsError(MCPDispatchError, ValueError):
    """Prompt arguments are missing or malformed."""
