"""MCP Common Types - Shared types used across the protocol."""

import copy
from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field

from mcp_dispatch.types.base import MCPModel


class Annotations(MCPModel):
    """Optional annotations for the client."""

    audience: list[Literal["user", "assistant"]] | None = None
    priority: Annotated[float | None, Field(ge=0.0, le=1.0)] = None


class Implementation(MCPModel):
    """Describes the name and version of an MCP implementation."""

    name: str
    version: str


class ServerCapabilities(MCPModel):
    """Capabilities that a server may support.

    Negotiated once when the server is built; instances are frozen so the
    set cannot drift while requests are being dispatched. The feature dicts
    themselves are mutable, so callers only ever receive copies of them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    experimental: dict[str, Any] | None = None
    logging: dict[str, Any] | None = None
    completions: dict[str, Any] | None = None
    prompts: dict[str, Any] | None = None
    resources: dict[str, Any] | None = None
    tools: dict[str, Any] | None = None

    def supports(self, capability: str) -> bool:
        return getattr(self, capability, None) is not None

    def feature(self, capability: str) -> dict[str, Any]:
        return copy.deepcopy(getattr(self, capability, None) or {})
