"""
MCP Server Module

The :class:`Server` owns the tool, prompt and resource registries, the
method handler table and the negotiated capabilities, and turns an incoming
``(method, params)`` pair into exactly one result or one
:class:`~mcp_dispatch.exceptions.HandlerError`.

Usage:
1. Create a Server instance:
   server = Server("your_server_name", tools=[...], prompts=[...])

2. Define tools and prompts with decorators:
   @server.define_tool(input_schema={"properties": {"city": {"type": "string"}}, "required": ["city"]})
   def forecast(city: str) -> str:
       return f"Sunny in {city}"

3. Replace default handlers or add new methods if needed:
   @server.read_resource()
   def read(params: dict) -> list[dict]:
       ...

   @server.custom_method("add")
   def add(params: dict) -> int:
       return params["a"] + params["b"]

4. Hand requests to the server from your JSON-RPC layer:
   result = server.dispatch("tools/call", {"name": "forecast", "arguments": {"city": "Oslo"}})

   or let the server parse the envelope itself:
   response = server.handle_json(raw_request)
"""

from __future__ import annotations as _annotations

import functools
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from mcp_dispatch import jsonrpc
from mcp_dispatch.configuration import Configuration
from mcp_dispatch.exceptions import ErrorKind, HandlerError, InputSchemaValidationError
from mcp_dispatch.handlers import MethodHandler, MethodRegistry
from mcp_dispatch.instrumentation import add_instrumentation_data, instrument_call
from mcp_dispatch.methods import Method, Notification, ensure_capability
from mcp_dispatch.prompts import Prompt, PromptArgument, PromptManager
from mcp_dispatch.resources import Resource, ResourceManager, ResourceTemplate
from mcp_dispatch.tools import InputSchema, Tool, ToolManager
from mcp_dispatch.types import Implementation, ServerCapabilities, ToolAnnotations
from mcp_dispatch.utilities.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_NAME = "model_context_protocol"
DEFAULT_VERSION = "0.1.0"

# list-style methods whose handler result is wrapped under a response key
_RESULT_KEYS: dict[str, str] = {
    Method.TOOLS_LIST: "tools",
    Method.PROMPTS_LIST: "prompts",
    Method.RESOURCES_LIST: "resources",
    Method.RESOURCES_READ: "contents",
    Method.RESOURCES_TEMPLATES_LIST: "resourceTemplates",
}


class Transport(Protocol):
    """The part of a transport the server needs: sending notifications to the client."""

    def send_notification(self, method: str, params: dict[str, Any] | None = None) -> Any: ...


def default_capabilities() -> ServerCapabilities:
    return ServerCapabilities(
        tools={"listChanged": True},
        prompts={"listChanged": True},
        resources={"listChanged": True},
    )


def _noop_handler(params: dict[str, Any]) -> None:
    return None


class Server:
    def __init__(
        self,
        name: str = DEFAULT_NAME,
        version: str = DEFAULT_VERSION,
        *,
        instructions: str | None = None,
        tools: Sequence[Tool] = (),
        prompts: Sequence[Prompt] = (),
        resources: Sequence[Resource] = (),
        resource_templates: Sequence[ResourceTemplate] = (),
        server_context: Any = None,
        configuration: Configuration | None = None,
        capabilities: ServerCapabilities | dict[str, Any] | None = None,
        transport: Transport | None = None,
    ):
        self.name = name
        self.version = version
        self.instructions = instructions
        self.server_context = server_context
        self.transport = transport
        self.configuration = Configuration().merge(configuration)
        configure_logging(self.configuration.log_level)

        if capabilities is None:
            self._capabilities = default_capabilities()
        else:
            self._capabilities = ServerCapabilities.model_validate(capabilities).model_copy(deep=True)

        self._tool_manager = ToolManager(self.configuration.warn_on_duplicate_tools, tools=list(tools))
        self._prompt_manager = PromptManager(self.configuration.warn_on_duplicate_prompts, prompts=list(prompts))
        self._resource_manager = ResourceManager(
            self.configuration.warn_on_duplicate_resources,
            resources=list(resources),
            templates=list(resource_templates),
        )

        self._handlers = MethodRegistry(
            {
                Method.RESOURCES_LIST: self._list_resources,
                Method.RESOURCES_READ: self._read_resource_no_content,
                Method.RESOURCES_TEMPLATES_LIST: self._list_resource_templates,
                Method.TOOLS_LIST: self._list_tools,
                Method.TOOLS_CALL: self._call_tool,
                Method.PROMPTS_LIST: self._list_prompts,
                Method.PROMPTS_GET: self._get_prompt,
                Method.INITIALIZE: self._initialize,
                Method.PING: lambda _: {},
                # No-op handlers for methods without a built-in implementation
                Method.RESOURCES_SUBSCRIBE: _noop_handler,
                Method.RESOURCES_UNSUBSCRIBE: _noop_handler,
                Method.COMPLETION_COMPLETE: _noop_handler,
                Method.LOGGING_SET_LEVEL: _noop_handler,
            }
        )
        logger.debug("Initializing server %r", name)

    @property
    def capabilities(self) -> ServerCapabilities:
        """A copy of the capabilities negotiated at construction."""
        return self._capabilities.model_copy(deep=True)

    @property
    def server_info(self) -> Implementation:
        return Implementation(name=self.name, version=self.version)

    def has_handler(self, method: str) -> bool:
        return method in self._handlers

    # -- registration -------------------------------------------------------

    def add_tool(self, tool: Tool) -> Tool:
        return self._tool_manager.add_tool(tool)

    def define_tool(
        self,
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        input_schema: InputSchema | dict[str, Any] | None = None,
        annotations: ToolAnnotations | dict[str, Any] | None = None,
        accepts_context: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator to register a function as a tool.

        The function is called with the tool arguments as keyword arguments.
        With ``accepts_context=True`` it also receives ``server_context=``.

        Args:
            name: Tool name; defaults to the function name
            title: Optional human-readable title
            description: Defaults to the function's docstring
            input_schema: Object schema of the arguments
            annotations: Optional hints about the tool's behavior
            accepts_context: Pass the server context to the function
        """
        if callable(name):
            raise TypeError(
                "The @define_tool decorator was used incorrectly. "
                "Did you forget to call it? Use @define_tool() instead of @define_tool"
            )

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.add_tool(
                Tool.from_function(
                    fn,
                    name=name,
                    title=title,
                    description=description,
                    input_schema=input_schema,
                    annotations=annotations,
                    accepts_context=accepts_context,
                )
            )
            return fn

        return decorator

    def add_prompt(self, prompt: Prompt) -> Prompt:
        return self._prompt_manager.add_prompt(prompt)

    def define_prompt(
        self,
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        arguments: Sequence[PromptArgument | dict[str, Any]] = (),
        accepts_context: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator to register a template function as a prompt.

        The function receives the prompt arguments as one dict.
        """
        if callable(name):
            raise TypeError(
                "The @define_prompt decorator was used incorrectly. "
                "Did you forget to call it? Use @define_prompt() instead of @define_prompt"
            )

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.add_prompt(
                Prompt.from_function(
                    fn,
                    name=name,
                    title=title,
                    description=description,
                    arguments=arguments,
                    accepts_context=accepts_context,
                )
            )
            return fn

        return decorator

    def add_resource(self, resource: Resource) -> Resource:
        return self._resource_manager.add_resource(resource)

    def add_resource_template(self, template: ResourceTemplate) -> ResourceTemplate:
        return self._resource_manager.add_template(template)

    def define_custom_method(self, method_name: str, handler: MethodHandler) -> None:
        """Register a handler for a method the server does not know yet.

        Raises:
            MethodAlreadyDefinedError: if ``method_name`` already has a handler,
                default or custom
        """
        self._handlers.define(method_name, handler)

    def custom_method(self, method_name: str) -> Callable[[MethodHandler], MethodHandler]:
        """Decorator form of :meth:`define_custom_method`."""

        def decorator(func: MethodHandler) -> MethodHandler:
            self.define_custom_method(method_name, func)
            return func

        return decorator

    # -- default handler overrides ------------------------------------------
    # These replace the current handler unconditionally.

    def _override(self, method: Method) -> Callable[[MethodHandler], MethodHandler]:
        def decorator(func: MethodHandler) -> MethodHandler:
            self._handlers.set(method, func)
            return func

        return decorator

    def list_tools(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.TOOLS_LIST)

    def call_tool(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.TOOLS_CALL)

    def list_prompts(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.PROMPTS_LIST)

    def get_prompt(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.PROMPTS_GET)

    def list_resources(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.RESOURCES_LIST)

    def read_resource(self) -> Callable[[MethodHandler], MethodHandler]:
        """Replace the default resources/read handler, which returns no content."""
        return self._override(Method.RESOURCES_READ)

    def list_resource_templates(self) -> Callable[[MethodHandler], MethodHandler]:
        return self._override(Method.RESOURCES_TEMPLATES_LIST)

    # -- notifications ------------------------------------------------------

    def notify_tools_list_changed(self) -> None:
        self._notify(Notification.TOOLS_LIST_CHANGED, "tools_list_changed")

    def notify_prompts_list_changed(self) -> None:
        self._notify(Notification.PROMPTS_LIST_CHANGED, "prompts_list_changed")

    def notify_resources_list_changed(self) -> None:
        self._notify(Notification.RESOURCES_LIST_CHANGED, "resources_list_changed")

    def _notify(self, notification: Notification, name: str) -> None:
        if self.transport is None:
            return

        try:
            self.transport.send_notification(notification.value)
        except Exception as e:
            logger.exception("Failed to send %s notification", notification.value)
            self._report_exception(e, {"notification": name})

    # -- dispatch -----------------------------------------------------------

    def resolve(self, method: str) -> Callable[[dict[str, Any] | None], Any] | None:
        """Find the callable that will run ``method``.

        Returns None for methods without a handler; those are recorded as an
        ``unsupported_method`` call rather than raised.

        Raises:
            MissingRequiredCapabilityError: if the method needs a capability
                the server did not negotiate
        """
        if method not in self._handlers:
            logger.info("Unsupported method %s", method)
            with instrument_call("unsupported_method", self.configuration.instrumentation_callback):
                pass
            return None

        ensure_capability(method, self._capabilities)
        return functools.partial(self._invoke, method)

    def dispatch(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Run ``method`` with ``params`` and return its result.

        Unknown methods return None.

        Raises:
            MissingRequiredCapabilityError: see :meth:`resolve`
            HandlerError: for every failure while the handler runs
        """
        call = self.resolve(method)
        if call is None:
            return None
        return call(params)

    def handle(self, request: Any) -> Any:
        """Handle a parsed JSON-RPC request (or batch) and return the response."""
        return jsonrpc.handle(request, self.resolve)

    def handle_json(self, request: str | bytes) -> str | None:
        """Handle a raw JSON-RPC message and return the serialized response."""
        return jsonrpc.handle_json(request, self.resolve)

    def _invoke(self, method: str, params: dict[str, Any] | None) -> Any:
        request = params if params is not None else {}
        logger.debug("Dispatching %s", method)

        with instrument_call(method, self.configuration.instrumentation_callback):
            handler = self._handlers.get(method)
            try:
                result = handler(request)
            except HandlerError as e:
                self._report_exception(e, {"request": request})
                add_instrumentation_data(error=e.error_type)
                raise
            except Exception as e:
                self._report_exception(e, {"request": request})
                add_instrumentation_data(error=ErrorKind.INTERNAL_ERROR)
                raise HandlerError(
                    f"Internal error handling {method} request", request, original_error=e
                ) from e

        if key := _RESULT_KEYS.get(method):
            return {key: result}
        return result

    def _report_exception(self, exception: BaseException, context: dict[str, Any]) -> None:
        self.configuration.exception_reporter(exception, context)

    # -- default handlers ---------------------------------------------------

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {
            "protocolVersion": self.configuration.protocol_version,
            "capabilities": self._capabilities.to_dict(),
            "serverInfo": self.server_info.to_dict(),
        }
        if self.instructions is not None:
            result["instructions"] = self.instructions
        return result

    def _list_tools(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        return [tool.to_dict() for tool in self._tool_manager.list_tools()]

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        tool_name = params.get("name")
        tool = self._tool_manager.get_tool(tool_name) if isinstance(tool_name, str) else None
        if tool is None:
            add_instrumentation_data(error=ErrorKind.TOOL_NOT_FOUND)
            raise HandlerError(f"Tool not found {tool_name}", params, error_type=ErrorKind.TOOL_NOT_FOUND)

        arguments = params.get("arguments") or {}
        add_instrumentation_data(tool_name=tool_name)

        if missing := tool.input_schema.missing_required_arguments(arguments):
            add_instrumentation_data(error=ErrorKind.MISSING_REQUIRED_ARGUMENTS)
            raise HandlerError(
                f"Missing required arguments: {', '.join(missing)}",
                params,
                error_type=ErrorKind.MISSING_REQUIRED_ARGUMENTS,
            )

        if self.configuration.validate_tool_call_arguments:
            try:
                tool.input_schema.validate_arguments(arguments)
            except InputSchemaValidationError as e:
                add_instrumentation_data(error=ErrorKind.INVALID_SCHEMA)
                raise HandlerError(str(e), params, error_type=ErrorKind.INVALID_SCHEMA) from e

        try:
            return tool.run(arguments, server_context=self.server_context)
        except HandlerError:
            raise
        except Exception as e:
            raise HandlerError(f"Internal error calling tool {tool_name}", params, original_error=e) from e

    def _list_prompts(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        return [prompt.to_dict() for prompt in self._prompt_manager.list_prompts()]

    def _get_prompt(self, params: dict[str, Any]) -> dict[str, Any]:
        prompt_name = params.get("name")
        prompt = self._prompt_manager.get_prompt(prompt_name) if isinstance(prompt_name, str) else None
        if prompt is None:
            add_instrumentation_data(error=ErrorKind.PROMPT_NOT_FOUND)
            raise HandlerError(f"Prompt not found {prompt_name}", params, error_type=ErrorKind.PROMPT_NOT_FOUND)

        add_instrumentation_data(prompt_name=prompt_name)

        arguments = params.get("arguments")
        prompt.validate_arguments(arguments)

        return prompt.render(arguments, server_context=self.server_context)

    def _list_resources(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        return [resource.to_dict() for resource in self._resource_manager.list_resources()]

    def _read_resource_no_content(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        # Replace through read_resource() to serve content
        add_instrumentation_data(resource_uri=params.get("uri"))
        return []

    def _list_resource_templates(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        return [template.to_dict() for template in self._resource_manager.list_templates()]
