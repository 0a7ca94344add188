"""MCP method identifiers and the capability each one requires."""

from __future__ import annotations

from enum import Enum

from mcp_dispatch.exceptions import MissingRequiredCapabilityError
from mcp_dispatch.types import ServerCapabilities


class Method(str, Enum):
    """Method names the server knows about out of the box.

    Members compare and hash equal to their string values, so a handler
    table keyed by ``str`` holds default and custom methods side by side.
    """

    INITIALIZE = "initialize"
    PING = "ping"

    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"

    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"

    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"
    RESOURCES_TEMPLATES_LIST = "resources/templates/list"
    RESOURCES_SUBSCRIBE = "resources/subscribe"
    RESOURCES_UNSUBSCRIBE = "resources/unsubscribe"

    COMPLETION_COMPLETE = "completion/complete"
    LOGGING_SET_LEVEL = "logging/setLevel"

    def __str__(self) -> str:
        return self.value


class Notification(str, Enum):
    """Notifications the server sends to the client."""

    TOOLS_LIST_CHANGED = "notifications/tools/list_changed"
    PROMPTS_LIST_CHANGED = "notifications/prompts/list_changed"
    RESOURCES_LIST_CHANGED = "notifications/resources/list_changed"

    def __str__(self) -> str:
        return self.value


_REQUIRED_CAPABILITIES: dict[str, str] = {
    Method.PROMPTS_LIST: "prompts",
    Method.PROMPTS_GET: "prompts",
    Method.RESOURCES_LIST: "resources",
    Method.RESOURCES_READ: "resources",
    Method.RESOURCES_TEMPLATES_LIST: "resources",
    Method.RESOURCES_SUBSCRIBE: "resources",
    Method.RESOURCES_UNSUBSCRIBE: "resources",
    Method.TOOLS_LIST: "tools",
    Method.TOOLS_CALL: "tools",
    Method.COMPLETION_COMPLETE: "completions",
    Method.LOGGING_SET_LEVEL: "logging",
}

_SUBSCRIPTION_METHODS = frozenset({Method.RESOURCES_SUBSCRIBE, Method.RESOURCES_UNSUBSCRIBE})


def required_capability(method: str) -> str | None:
    """Name of the capability ``method`` needs, or None if it needs none."""
    return _REQUIRED_CAPABILITIES.get(method)


def ensure_capability(method: str, capabilities: ServerCapabilities) -> None:
    """Raise if ``capabilities`` do not allow ``method`` to be dispatched.

    initialize, ping and custom methods need no capability.

    Raises:
        MissingRequiredCapabilityError: naming the capability that is missing
    """
    capability = required_capability(method)
    if capability is None:
        return

    if not capabilities.supports(capability):
        raise MissingRequiredCapabilityError(method, capability)

    if method in _SUBSCRIPTION_METHODS and not capabilities.feature("resources").get("subscribe"):
        raise MissingRequiredCapabilityError(method, "resources.subscribe")
