"""Helpers for invoking user-supplied tool and prompt callables."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

import anyio


def is_async_callable(obj: Any) -> bool:
    while isinstance(obj, functools.partial):
        obj = obj.func

    return inspect.iscoroutinefunction(obj) or (
        callable(obj) and inspect.iscoroutinefunction(getattr(obj, "__call__", None))
    )


def call_blocking(fn: Callable[..., Any], is_async: bool, *args: Any, **kwargs: Any) -> Any:
    """Call ``fn`` and return its result, driving coroutine functions to completion.

    Dispatch is synchronous, so an async body runs on its own event loop for
    the duration of the call. Must not be used from inside a running loop.
    """
    if is_async:
        return anyio.run(functools.partial(fn, *args, **kwargs))
    return fn(*args, **kwargs)
