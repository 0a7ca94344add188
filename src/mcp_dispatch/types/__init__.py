from mcp_dispatch.types.base import DEFAULT_PROTOCOL_VERSION, MCPModel, Meta, Result
from mcp_dispatch.types.common import Annotations, Implementation, ServerCapabilities
from mcp_dispatch.types.content import AudioContent, ContentBlock, ImageContent, TextContent
from mcp_dispatch.types.prompts import GetPromptResult, PromptMessage
from mcp_dispatch.types.tools import CallToolResult, ToolAnnotations

__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "Annotations",
    "AudioContent",
    "CallToolResult",
    "ContentBlock",
    "GetPromptResult",
    "ImageContent",
    "Implementation",
    "MCPModel",
    "Meta",
    "PromptMessage",
    "Result",
    "ServerCapabilities",
    "TextContent",
    "ToolAnnotations",
]
