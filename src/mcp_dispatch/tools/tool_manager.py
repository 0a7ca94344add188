from __future__ import annotations as _annotations

from mcp_dispatch.tools.base import Tool
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)


class ToolManager:
    """Registry of tools keyed by name.

    Registering a name that is already taken replaces the earlier tool
    (last write wins); a warning is logged when ``warn_on_duplicate_tools``
    is set.
    """

    def __init__(
        self,
        warn_on_duplicate_tools: bool = True,
        *,
        tools: list[Tool] | None = None,
    ):
        self._tools: dict[str, Tool] = {}
        self.warn_on_duplicate_tools = warn_on_duplicate_tools
        for tool in tools or []:
            self.add_tool(tool)

    def add_tool(self, tool: Tool) -> Tool:
        """Add a tool, replacing any tool registered under the same name."""
        if tool.name in self._tools and self.warn_on_duplicate_tools:
            logger.warning(f"Tool already exists, replacing it: {tool.name}")
        logger.debug("Adding tool", extra={"tool_name": tool.name})
        self._tools[tool.name] = tool
        return tool

    def get_tool(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
