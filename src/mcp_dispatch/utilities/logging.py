"""Logging utilities for mcp_dispatch."""

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_logger(name: str) -> logging.Logger:
    """Get a logger for an mcp_dispatch module.

    Args:
        name: the module name, usually ``__name__``

    Returns:
        a logger instance
    """
    return logging.getLogger(name)


def configure_logging(level: LogLevel = "INFO") -> None:
    """Configure logging for mcp_dispatch.

    Records go to stderr so that stdio transports keep stdout to themselves.

    Args:
        level: the log level to use
    """
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
    )
