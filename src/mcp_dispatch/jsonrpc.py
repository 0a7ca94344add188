"""JSON-RPC 2.0 envelope handling in front of the dispatcher.

The dispatcher itself only ever sees ``(method, params)``. These helpers parse
request envelopes, call the resolved handler and translate its outcome into
a response envelope. Notifications (requests without an id) get no response.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from mcp_dispatch.exceptions import ErrorKind, HandlerError, MissingRequiredCapabilityError
from mcp_dispatch.types.json_rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorData,
    JSONRPCRequest,
    JSONRPCResultResponse,
    RequestId,
)
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)

Resolver = Callable[[str], Callable[[dict[str, Any] | None], Any] | None]

_INVALID_PARAMS_KINDS = frozenset(
    {
        ErrorKind.TOOL_NOT_FOUND,
        ErrorKind.PROMPT_NOT_FOUND,
        ErrorKind.MISSING_REQUIRED_ARGUMENTS,
        ErrorKind.INVALID_SCHEMA,
    }
)


def error_response(request_id: RequestId | None, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error = ErrorData(code=code, message=message, data=data)
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error.model_dump(mode="json", exclude_none=True),
    }


def handle(request: Any, resolve: Resolver) -> dict[str, Any] | list[dict[str, Any]] | None:
    """Handle a single request or a batch.

    A batch returns the list of responses, or None when it held only
    notifications.
    """
    if isinstance(request, list):
        if not request:
            return error_response(None, INVALID_REQUEST, "Invalid Request", "Request is an empty array")
        responses = [response for item in request if (response := _handle_one(item, resolve)) is not None]
        return responses or None

    return _handle_one(request, resolve)


def handle_json(request: str | bytes, resolve: Resolver) -> str | None:
    try:
        parsed = json.loads(request)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return json.dumps(error_response(None, PARSE_ERROR, "Parse error", str(e)))

    response = handle(parsed, resolve)
    if response is None:
        return None
    return json.dumps(response)


def _handle_one(request: Any, resolve: Resolver) -> dict[str, Any] | None:
    try:
        message = JSONRPCRequest.model_validate(request)
    except ValidationError as e:
        return error_response(_salvage_id(request), INVALID_REQUEST, "Invalid Request", str(e))

    try:
        result = _call(message, resolve)
        if message.id is None:
            return None
        return JSONRPCResultResponse(id=message.id, result=result).model_dump(mode="json")
    except MissingRequiredCapabilityError as e:
        response = error_response(message.id, METHOD_NOT_FOUND, str(e), {"capability": e.capability})
    except HandlerError as e:
        code = INVALID_PARAMS if e.error_type in _INVALID_PARAMS_KINDS else INTERNAL_ERROR
        response = error_response(message.id, code, str(e), {"kind": str(e.error_type)})
    except _MethodNotFound:
        response = error_response(message.id, METHOD_NOT_FOUND, "Method not found", message.method)
    except Exception as e:
        logger.exception("Unhandled error for %s", message.method)
        response = error_response(message.id, INTERNAL_ERROR, "Internal error", str(e))

    # notifications get no response, not even an error
    if message.id is None:
        return None
    return response


class _MethodNotFound(Exception):
    pass


def _call(message: JSONRPCRequest, resolve: Resolver) -> Any:
    call = resolve(message.method)
    if call is None:
        raise _MethodNotFound(message.method)
    return call(message.params)


def _salvage_id(request: Any) -> RequestId | None:
    if isinstance(request, dict):
        request_id = request.get("id")
        if isinstance(request_id, str) or (isinstance(request_id, int) and not isinstance(request_id, bool)):
            return request_id
    return None
