"""MCP Tools Types - Types for tool listing and invocation results."""

from typing import Annotated, Any

from pydantic import Field

from mcp_dispatch.types.base import MCPModel, Result
from mcp_dispatch.types.content import ContentBlock


class ToolAnnotations(MCPModel):
    """Additional properties describing a Tool to clients."""

    title: str | None = None
    read_only_hint: Annotated[bool | None, Field(alias="readOnlyHint")] = None
    destructive_hint: Annotated[bool | None, Field(alias="destructiveHint")] = None
    idempotent_hint: Annotated[bool | None, Field(alias="idempotentHint")] = None
    open_world_hint: Annotated[bool | None, Field(alias="openWorldHint")] = None


class CallToolResult(Result):
    """Server's response to a tools/call request."""

    content: list[ContentBlock]
    structured_content: Annotated[dict[str, Any] | None, Field(alias="structuredContent")] = None
    is_error: Annotated[bool, Field(alias="isError")] = False
