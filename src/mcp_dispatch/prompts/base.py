"""Base classes for prompts."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from mcp_dispatch.exceptions import PromptArgumentsError
from mcp_dispatch.types import GetPromptResult, PromptMessage, TextContent
from mcp_dispatch.utilities.func_calls import call_blocking, is_async_callable


class PromptArgument(BaseModel):
    """An argument that can be passed to a prompt."""

    name: str = Field(description="Name of the argument")
    description: str | None = Field(None, description="Description of what the argument does")
    required: bool = Field(default=False, description="Whether the argument is required")


class Prompt(BaseModel):
    """A prompt template that can be rendered with arguments.

    ``fn`` receives the arguments as a single dict. It may return a
    :class:`GetPromptResult`, a dict in that shape, a string or a sequence of
    strings and :class:`PromptMessage` objects.
    """

    name: str = Field(description="Name of the prompt")
    title: str | None = Field(None, description="Human-readable title of the prompt")
    description: str | None = Field(None, description="Description of what the prompt does")
    arguments: list[PromptArgument] = Field(default_factory=list, description="Arguments the prompt accepts")
    fn: Callable[..., Any] = Field(exclude=True)
    accepts_context: bool = Field(False, description="Whether fn takes a server_context keyword argument")
    is_async: bool = Field(False, description="Whether the prompt function is async")

    @classmethod
    def from_function(
        cls,
        fn: Callable[..., Any],
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        arguments: Sequence[PromptArgument | dict[str, Any]] = (),
        accepts_context: bool = False,
    ) -> Prompt:
        """Create a Prompt from a template function."""
        func_name = name or fn.__name__
        if func_name == "<lambda>":
            raise ValueError("You must provide a name for lambda functions")

        return cls(
            name=func_name,
            title=title,
            description=description or fn.__doc__,
            arguments=[PromptArgument.model_validate(arg) for arg in arguments],
            fn=fn,
            accepts_context=accepts_context,
            is_async=is_async_callable(fn),
        )

    def to_dict(self) -> dict[str, Any]:
        """Entry for a prompts/list response."""
        result: dict[str, Any] = {
            "name": self.name,
            "arguments": [arg.model_dump(exclude_none=True) for arg in self.arguments],
        }
        if self.title is not None:
            result["title"] = self.title
        if self.description is not None:
            result["description"] = self.description
        return result

    def validate_arguments(self, arguments: dict[str, Any] | None) -> None:
        """Check that every required argument is present.

        Raises:
            PromptArgumentsError: naming the missing arguments
        """
        provided = arguments or {}
        missing = [arg.name for arg in self.arguments if arg.required and arg.name not in provided]
        if missing:
            raise PromptArgumentsError(f"Missing required arguments: {', '.join(missing)}")

    def render(self, arguments: dict[str, Any] | None = None, server_context: Any = None) -> dict[str, Any]:
        """Render the prompt and return its canonical result."""
        kwargs = {"server_context": server_context} if self.accepts_context else {}
        result = call_blocking(self.fn, self.is_async, arguments or {}, **kwargs)
        return self._convert_result(result)

    def _convert_result(self, result: Any) -> dict[str, Any]:
        if isinstance(result, GetPromptResult):
            return result.to_dict()
        if isinstance(result, dict):
            return GetPromptResult.model_validate(result).to_dict()

        if isinstance(result, str | PromptMessage):
            result = [result]
        messages = [_to_message(msg) for msg in result]
        return GetPromptResult(description=self.description, messages=messages).to_dict()


def _to_message(msg: Any) -> PromptMessage:
    if isinstance(msg, PromptMessage):
        return msg
    if isinstance(msg, dict):
        return PromptMessage.model_validate(msg)
    return PromptMessage(role="user", content=TextContent(text=str(msg)))
