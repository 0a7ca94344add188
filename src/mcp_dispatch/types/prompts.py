"""MCP Prompt Types - Types for prompt rendering results."""

from typing import Literal

from mcp_dispatch.types.base import MCPModel, Result
from mcp_dispatch.types.content import ContentBlock


class PromptMessage(MCPModel):
    """Describes a message returned as part of a prompt."""

    role: Literal["user", "assistant"]
    content: ContentBlock


class GetPromptResult(Result):
    """The server's response to a prompts/get request from the client."""

    description: str | None = None
    messages: list[PromptMessage]
