"""Per-call instrumentation for the dispatcher.

Each dispatched call collects a flat dict of facts (the method, the tool or
prompt it resolved to, the error kind if it failed, its duration) and hands
it to the configured ``instrumentation_callback`` when the call finishes,
whether or not it succeeded.
"""

from __future__ import annotations

import contextvars
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from mcp_dispatch.configuration import InstrumentationCallback
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)

_instrumentation_data: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "instrumentation_data", default=None
)


@contextmanager
def instrument_call(method: str, callback: InstrumentationCallback) -> Iterator[dict[str, Any]]:
    """Collect instrumentation data for one call and report it on exit."""
    data: dict[str, Any] = {"method": method}
    token = _instrumentation_data.set(data)
    start = time.perf_counter()
    try:
        yield data
    finally:
        data["duration"] = time.perf_counter() - start
        _instrumentation_data.reset(token)
        logger.debug("Instrumented call: %s", data)
        callback(data)


def add_instrumentation_data(**values: Any) -> None:
    """Annotate the call currently being instrumented.

    Outside of :func:`instrument_call` this does nothing.
    """
    data = _instrumentation_data.get()
    if data is not None:
        data.update(values)
