"""Server configuration.

A :class:`Configuration` is an explicit value handed to the server; there is
no process-wide instance. The server merges the caller's overrides onto a
freshly built default, so every field may also come from ``MCP_DISPATCH_*``
environment variables.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_dispatch.types import DEFAULT_PROTOCOL_VERSION
from mcp_dispatch.utilities.logging import LogLevel

ExceptionReporter = Callable[[BaseException, dict[str, Any]], None]
InstrumentationCallback = Callable[[dict[str, Any]], None]


def _ignore_exception(exception: BaseException, context: dict[str, Any]) -> None:
    pass


def _ignore_instrumentation(data: dict[str, Any]) -> None:
    pass


class Configuration(BaseSettings):
    """mcp_dispatch server settings.

    All settings can be configured via environment variables with the prefix
    MCP_DISPATCH_. For example, MCP_DISPATCH_VALIDATE_TOOL_CALL_ARGUMENTS=false
    turns off full schema validation of tool arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="MCP_DISPATCH_",
        extra="ignore",
        frozen=True,
    )

    protocol_version: str = DEFAULT_PROTOCOL_VERSION

    validate_tool_call_arguments: bool = True
    """Run full JSON Schema validation on tools/call arguments."""

    exception_reporter: ExceptionReporter = _ignore_exception
    """Called as ``reporter(exception, context)`` for every failed request."""

    instrumentation_callback: InstrumentationCallback = _ignore_instrumentation
    """Receives the collected data of every dispatched call."""

    # registry settings
    warn_on_duplicate_tools: bool = True
    warn_on_duplicate_prompts: bool = True
    warn_on_duplicate_resources: bool = True

    log_level: LogLevel = "INFO"

    def merge(self, other: Configuration | None) -> Configuration:
        """Return a copy of this configuration with the fields set on ``other`` applied."""
        if other is None:
            return self
        overrides = {name: getattr(other, name) for name in other.model_fields_set}
        return self.model_copy(update=overrides)
