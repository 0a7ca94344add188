from .base import InputSchema, Tool
from .tool_manager import ToolManager

__all__ = ["InputSchema", "Tool", "ToolManager"]
