"""
MCP dispatcher - decodes a JSON-RPC envelope, routes it, shapes the reply.

One Dispatcher serves one service. It holds only read-only state (the tool
registry and server info); every request opens its own upstream session.
"""
import json
import logging
import time
from typing import Any, AsyncContextManager, Callable, Union

from pydantic import ValidationError

from ..logging_config import log_tool_call, log_tool_result
from ..tools.base import ToolRegistry
from ..tools.schemas import ActionResult
from .errors import ConfigurationError, InvalidArgumentsError, UpstreamError
from .models import (
    MCPRequest,
    ServerInfo,
    ToolCallParams,
    ERROR_INVALID_PARAMS,
    ERROR_INVALID_REQUEST,
    ERROR_METHOD_NOT_FOUND,
    ERROR_PARSE_ERROR,
    ERROR_SERVER_ERROR,
)
from .utils import error_response, initialize_result, success_response, tool_result

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncContextManager[Any]]


def _recover_id(payload: Any) -> Union[int, str]:
    """Best-effort id for replies to envelopes that failed validation."""
    if isinstance(payload, dict):
        request_id = payload.get("id")
        if isinstance(request_id, (int, str)) and not isinstance(request_id, bool):
            return request_id
    return 0


class Dispatcher:
    """
    Generic MCP request router.

    Args:
        registry: The service's tool catalog and handlers
        server_info: Metadata returned on initialize
        session_factory: Zero-argument callable returning an async context
            manager that yields a fresh upstream client for one request
    """

    def __init__(
        self,
        registry: ToolRegistry,
        server_info: ServerInfo,
        session_factory: SessionFactory
    ) -> None:
        self.registry = registry
        self.server_info = server_info
        self.session_factory = session_factory

    async def handle_raw(self, body: Union[bytes, str]) -> dict:
        """Decode a raw request body and dispatch it."""
        try:
            payload = json.loads(body)
        except ValueError:
            logger.warning("Could not decode request body")
            return error_response(0, ERROR_PARSE_ERROR, "Parse error")
        return await self.handle(payload)

    async def handle(self, payload: Any) -> dict:
        """Dispatch an already-decoded JSON-RPC request."""
        try:
            request = MCPRequest.model_validate(payload)
        except ValidationError as e:
            return error_response(
                _recover_id(payload),
                ERROR_INVALID_REQUEST,
                "Invalid Request",
                {"errors": [err["msg"] for err in e.errors()]}
            )

        # Route: initialize
        if request.method == "initialize":
            return success_response(request.id, initialize_result(self.server_info))

        # Route: tools/list
        elif request.method == "tools/list":
            return success_response(request.id, {"tools": self.registry.list_tools()})

        # Route: tools/call
        elif request.method == "tools/call":
            return await self.call_tool(request)

        # Error: unknown method
        else:
            return error_response(
                request.id,
                ERROR_METHOD_NOT_FOUND,
                f"Method not found: {request.method}"
            )

    async def call_tool(self, request: MCPRequest) -> dict:
        """Handle tools/call: resolve the tool, validate arguments, invoke upstream."""
        try:
            params = ToolCallParams.model_validate(request.params or {})
        except ValidationError:
            return error_response(
                request.id,
                ERROR_INVALID_PARAMS,
                "Invalid params: tools/call requires 'name' and an 'arguments' object"
            )

        tool_def = self.registry.get_tool(params.name)
        if tool_def is None:
            return error_response(request.id, ERROR_METHOD_NOT_FOUND, f"Unknown tool: {params.name}")

        try:
            arguments = tool_def.parse_arguments(params.arguments)
        except InvalidArgumentsError as e:
            return error_response(request.id, ERROR_INVALID_PARAMS, str(e), {"errors": e.errors})

        log_tool_call(logger, tool_def.name, params.arguments)
        started = time.perf_counter()

        try:
            async with self.session_factory() as client:
                result = await tool_def.function(client, arguments)
        except ConfigurationError as e:
            log_tool_result(logger, tool_def.name, False, time.perf_counter() - started)
            return error_response(request.id, ERROR_SERVER_ERROR, str(e))
        except UpstreamError as e:
            log_tool_result(logger, tool_def.name, False, time.perf_counter() - started)
            data = {"status": e.status} if e.status is not None else None
            return error_response(request.id, ERROR_SERVER_ERROR, f"Tool execution failed: {e}", data)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", tool_def.name)
            log_tool_result(logger, tool_def.name, False, time.perf_counter() - started)
            return error_response(request.id, ERROR_SERVER_ERROR, f"Tool execution failed: {e}")

        is_error = (
            tool_def.reports_failure_in_result
            and isinstance(result, ActionResult)
            and not result.success
        )
        log_tool_result(logger, tool_def.name, not is_error, time.perf_counter() - started)
        return success_response(request.id, tool_result(result, is_error=is_error))
