from .configuration import Configuration
from .exceptions import (
    ErrorKind,
    HandlerError,
    InputSchemaValidationError,
    MCPDispatchError,
    MethodAlreadyDefinedError,
    MissingRequiredCapabilityError,
    PromptArgumentsError,
)
from .logging_message_notification import LOG_LEVELS, LoggingMessageNotification
from .methods import Method, Notification
from .prompts import Prompt, PromptArgument
from .resources import Resource, ResourceTemplate
from .server import Server, Transport
from .tools import InputSchema, Tool
from .types import ServerCapabilities, ToolAnnotations

__all__ = [
    "LOG_LEVELS",
    "Configuration",
    "ErrorKind",
    "HandlerError",
    "InputSchema",
    "InputSchemaValidationError",
    "LoggingMessageNotification",
    "MCPDispatchError",
    "Method",
    "MethodAlreadyDefinedError",
    "MissingRequiredCapabilityError",
    "Notification",
    "Prompt",
    "PromptArgument",
    "PromptArgumentsError",
    "Resource",
    "ResourceTemplate",
    "Server",
    "ServerCapabilities",
    "Tool",
    "ToolAnnotations",
    "Transport",
]
