from __future__ import annotations as _annotations

from collections.abc import Callable, Sequence
from typing import Any

import jsonschema
import pydantic_core
from jsonschema.validators import validator_for
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from mcp_dispatch.exceptions import InputSchemaValidationError
from mcp_dispatch.types import CallToolResult, TextContent, ToolAnnotations
from mcp_dispatch.types.content import AudioContent, ImageContent
from mcp_dispatch.utilities.func_calls import call_blocking, is_async_callable


class InputSchema(BaseModel):
    """JSON Schema describing the arguments of a tool.

    Only object schemas are allowed: ``properties`` maps argument names to
    their schemas and ``required`` lists the names that must be present.
    """

    model_config = ConfigDict(frozen=True)

    properties: dict[str, Any] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    _validator: Any = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        schema = self.to_dict()
        validator_cls = validator_for(schema)
        try:
            validator_cls.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid tool input schema: {e.message}") from e
        self._validator = validator_cls(schema)

    @field_validator("required")
    @classmethod
    def _required_names_are_unique(cls, required: list[str]) -> list[str]:
        if len(set(required)) != len(required):
            raise ValueError("Required argument names must be unique")
        return required

    def to_dict(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": self.properties}
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def missing_required_arguments(self, arguments: dict[str, Any]) -> list[str]:
        return [name for name in self.required if name not in arguments]

    def has_missing_required_arguments(self, arguments: dict[str, Any]) -> bool:
        return bool(self.missing_required_arguments(arguments))

    def validate_arguments(self, arguments: dict[str, Any]) -> None:
        """Run full validation of ``arguments`` against the schema.

        Raises:
            InputSchemaValidationError: listing every violation found
        """
        errors = [error.message for error in self._validator.iter_errors(arguments)]
        if errors:
            raise InputSchemaValidationError(f"Invalid arguments: {', '.join(errors)}")


class Tool(BaseModel):
    """Internal tool registration info."""

    fn: Callable[..., Any] = Field(exclude=True)
    name: str = Field(description="Name of the tool")
    title: str | None = Field(None, description="Human-readable title of the tool")
    description: str = Field("", description="Description of what the tool does")
    input_schema: InputSchema = Field(default_factory=InputSchema, description="Schema for tool arguments")
    annotations: ToolAnnotations | None = Field(None, description="Optional annotations for the tool")
    accepts_context: bool = Field(False, description="Whether fn takes a server_context keyword argument")
    is_async: bool = Field(False, description="Whether the tool is async")

    @classmethod
    def from_function(
        cls,
        fn: Callable[..., Any],
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        input_schema: InputSchema | dict[str, Any] | None = None,
        annotations: ToolAnnotations | dict[str, Any] | None = None,
        accepts_context: bool = False,
    ) -> Tool:
        """Create a Tool from a function."""
        func_name = name or fn.__name__

        if func_name == "<lambda>":
            raise ValueError("You must provide a name for lambda functions")

        if isinstance(input_schema, dict):
            input_schema = InputSchema.model_validate(input_schema)
        if isinstance(annotations, dict):
            annotations = ToolAnnotations.model_validate(annotations)

        return cls(
            fn=fn,
            name=func_name,
            title=title,
            description=description or fn.__doc__ or "",
            input_schema=input_schema or InputSchema(),
            annotations=annotations,
            accepts_context=accepts_context,
            is_async=is_async_callable(fn),
        )

    def to_dict(self) -> dict[str, Any]:
        """Entry for a tools/list response."""
        result: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.to_dict(),
        }
        if self.title is not None:
            result["title"] = self.title
        if self.annotations is not None:
            result["annotations"] = self.annotations.to_dict()
        return result

    def run(self, arguments: dict[str, Any], server_context: Any = None) -> dict[str, Any]:
        """Run the tool with arguments and return its canonical result."""
        kwargs = dict(arguments)
        if self.accepts_context:
            kwargs["server_context"] = server_context

        result = call_blocking(self.fn, self.is_async, **kwargs)
        return _convert_result(result)


def _convert_result(result: Any) -> dict[str, Any]:
    if isinstance(result, CallToolResult):
        return result.to_dict()
    if isinstance(result, dict):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True, exclude_none=True, mode="json")
    if result is None:
        return CallToolResult(content=[]).to_dict()
    if isinstance(result, str | bytes | bytearray):
        return CallToolResult(content=[_to_content(result)]).to_dict()
    if isinstance(result, Sequence):
        return CallToolResult(content=[_to_content(item) for item in result]).to_dict()
    return CallToolResult(content=[_to_content(result)]).to_dict()


def _to_content(item: Any) -> TextContent | ImageContent | AudioContent:
    if isinstance(item, TextContent | ImageContent | AudioContent):
        return item
    if isinstance(item, str):
        return TextContent(text=item)
    if isinstance(item, bytes | bytearray):
        return TextContent(text=bytes(item).decode("utf-8", errors="replace"))
    return TextContent(text=pydantic_core.to_json(item, fallback=str, indent=2).decode())
