"""MCP Content Types - Content block types used in prompts and tool results."""

from typing import Annotated, Literal

from pydantic import Field

from mcp_dispatch.types.base import MCPModel
from mcp_dispatch.types.common import Annotations


class TextContent(MCPModel):
    """Text provided to or from an LLM."""

    type: Literal["text"] = "text"
    text: str
    annotations: Annotations | None = None


class ImageContent(MCPModel):
    """An image provided to or from an LLM."""

    type: Literal["image"] = "image"
    data: str  # base64 encoded
    mime_type: Annotated[str, Field(alias="mimeType")]
    annotations: Annotations | None = None


class AudioContent(MCPModel):
    """Audio provided to or from an LLM."""

    type: Literal["audio"] = "audio"
    data: str  # base64 encoded
    mime_type: Annotated[str, Field(alias="mimeType")]
    annotations: Annotations | None = None


ContentBlock = TextContent | ImageContent | AudioContent
