import logging

from rich.logging import RichHandler

from mcp_dispatch.utilities.logging import configure_logging, get_logger


def test_get_logger_uses_module_name():
    logger = get_logger("mcp_dispatch.server")

    assert logger is logging.getLogger("mcp_dispatch.server")


def test_configure_logging_installs_rich_handler():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    # pytest attaches its capture handlers for the call phase, and basicConfig
    # only configures a root logger without handlers
    root.handlers = []
    try:
        configure_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, RichHandler)
        assert handler.console.stderr
    finally:
        root.handlers = handlers
        root.setLevel(level)
