"""Method handler table for the server."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from mcp_dispatch.exceptions import MethodAlreadyDefinedError
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)

MethodHandler = Callable[[dict[str, Any]], Any]
"""A handler receives the request params (an empty dict when none were sent)."""


class MethodRegistry:
    """Ordered mapping of method name to handler.

    ``set`` replaces whatever is registered; it backs the override decorators
    for default methods. ``define`` refuses to replace, so a new method can
    never silently shadow an existing one.
    """

    def __init__(self, handlers: dict[str, MethodHandler] | None = None) -> None:
        self._handlers: dict[str, MethodHandler] = dict(handlers or {})

    def get(self, method: str) -> MethodHandler | None:
        return self._handlers.get(method)

    def set(self, method: str, handler: MethodHandler) -> None:
        logger.debug("Setting handler for %s", method)
        self._handlers[method] = handler

    def define(self, method: str, handler: MethodHandler) -> None:
        """Register a handler for a method that has none yet.

        Raises:
            MethodAlreadyDefinedError: if ``method`` already has a handler
        """
        if method in self._handlers:
            raise MethodAlreadyDefinedError(method)
        logger.debug("Defining custom method %s", method)
        self._handlers[method] = handler

    def __contains__(self, method: object) -> bool:
        return method in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)
