"""Base types shared by every MCP model in mcp_dispatch."""

from typing import Annotated, Any, Final

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROTOCOL_VERSION: Final[str] = "2024-11-05"


class MCPModel(BaseModel):
    """Base class for all MCP domain types. Allows extra fields for forward compatibility."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Canonical wire representation: camelCase keys, unset optionals dropped."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Meta(MCPModel):
    """Base class for MCP meta information models."""


class Result(MCPModel):
    """Base class for MCP results with _meta support."""

    meta: Annotated[Meta | None, Field(alias="_meta")] = None
