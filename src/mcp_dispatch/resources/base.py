"""Resource and resource template entities."""

from typing import Annotated

from pydantic import AnyUrl, ConfigDict, Field, UrlConstraints, ValidationInfo, field_validator

from mcp_dispatch.types import Annotations, MCPModel

# URI type that allows any protocol (no host required)
Uri = Annotated[AnyUrl, UrlConstraints(host_required=False)]


class Resource(MCPModel):
    """A known resource that the server is capable of reading."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, validate_default=True)

    uri: Uri = Field(description="URI of the resource")
    name: str | None = Field(None, description="Name of the resource")
    title: str | None = Field(None, description="Human-readable title of the resource")
    description: str | None = Field(None, description="Description of the resource")
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None
    annotations: Annotations | None = None
    size: int | None = None

    @field_validator("name", mode="before")
    @classmethod
    def set_default_name(cls, name: str | None, info: ValidationInfo) -> str:
        """Set default name from URI if not provided."""
        if name:
            return name
        if uri := info.data.get("uri"):
            return str(uri)
        raise ValueError("Either name or uri must be provided")

    @property
    def key(self) -> str:
        return str(self.uri)


class ResourceTemplate(MCPModel):
    """A template description for resources available on the server."""

    uri_template: Annotated[str, Field(alias="uriTemplate")]
    name: str
    title: str | None = None
    description: str | None = None
    mime_type: Annotated[str | None, Field(alias="mimeType")] = None
    annotations: Annotations | None = None
