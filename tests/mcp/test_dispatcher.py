"""Tests for the generic MCP Dispatcher."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any

import pytest
from pydantic import BaseModel

from mcpbridge.mcp.dispatcher import Dispatcher
from mcpbridge.mcp.errors import ConfigurationError, UpstreamError
from mcpbridge.mcp.models import (
    ERROR_INVALID_PARAMS,
    ERROR_INVALID_REQUEST,
    ERROR_METHOD_NOT_FOUND,
    ERROR_PARSE_ERROR,
    ERROR_SERVER_ERROR,
    ServerInfo,
)
from mcpbridge.tools.base import ToolRegistry, object_schema
from mcpbridge.tools.schemas import ActionResult


class EchoArgs(BaseModel):
    message: str
    times: int = 1


class NoArgs(BaseModel):
    pass


class StubClient:
    def __init__(self) -> None:
        self.calls: list[str] = []


class SessionTracker:
    """Session factory that records how many sessions were opened and closed."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.opened = 0
        self.closed = 0
        self.fail_with = fail_with

    def __call__(self):
        @asynccontextmanager
        async def session():
            if self.fail_with is not None:
                raise self.fail_with
            self.opened += 1
            try:
                yield StubClient()
            finally:
                self.closed += 1

        return session()


def _registry() -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool(
        name="echo",
        description="Echo a message",
        input_schema=object_schema({"message": {"type": "string"}}, ["message"]),
        arguments=EchoArgs,
    )
    async def echo(client: StubClient, args: EchoArgs) -> dict[str, Any]:
        return {"echo": args.message * args.times}

    @registry.tool(
        name="explode",
        description="Always fails upstream",
        input_schema=object_schema({}),
        arguments=NoArgs,
    )
    async def explode(client: StubClient, args: NoArgs) -> None:
        raise UpstreamError("GitHub API error (404): Not Found", status=404)

    @registry.tool(
        name="crash",
        description="Raises an unexpected error",
        input_schema=object_schema({}),
        arguments=NoArgs,
    )
    async def crash(client: StubClient, args: NoArgs) -> None:
        raise KeyError("items")

    @registry.tool(
        name="act",
        description="Reports failure in its body",
        input_schema=object_schema({}),
        arguments=NoArgs,
        reports_failure_in_result=True,
    )
    async def act(client: StubClient, args: NoArgs) -> ActionResult:
        return ActionResult(success=False, message="Element not found or not visible: #go")

    return registry


INFO = ServerInfo(name="Test MCP Server", description="Dispatcher under test")


@pytest.fixture
def sessions() -> SessionTracker:
    return SessionTracker()


@pytest.fixture
def dispatcher(sessions: SessionTracker) -> Dispatcher:
    return Dispatcher(_registry(), INFO, sessions)


class TestDecode:
    async def test_malformed_json_is_parse_error_with_id_zero(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle_raw(b'{"jsonrpc": "2.0", "id": 7, "method": ')
        assert response == {
            "jsonrpc": "2.0",
            "id": 0,
            "error": {"code": ERROR_PARSE_ERROR, "message": "Parse error"},
        }

    @pytest.mark.parametrize("body", [b"", b"not json", b"\xff\xfe", "{'single': 'quotes'}"])
    async def test_various_malformed_bodies(self, dispatcher: Dispatcher, body: bytes | str) -> None:
        response = await dispatcher.handle_raw(body)
        assert response["error"]["code"] == ERROR_PARSE_ERROR
        assert response["id"] == 0
        assert "result" not in response

    async def test_non_object_envelope_is_invalid_request(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle_raw(b"[1, 2, 3]")
        assert response["error"]["code"] == ERROR_INVALID_REQUEST
        assert response["id"] == 0

    @pytest.mark.parametrize("request_id", [True, False, 1.0, None, [1]])
    async def test_id_must_be_string_or_integer(self, dispatcher: Dispatcher, request_id) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": request_id, "method": "initialize"})
        assert response["error"]["code"] == ERROR_INVALID_REQUEST
        assert response["id"] == 0
        assert "result" not in response

    async def test_numeric_string_id_is_not_coerced(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": "7", "method": "initialize"})
        assert response["id"] == "7"

    async def test_missing_method_keeps_recoverable_id(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": "abc"})
        assert response["error"]["code"] == ERROR_INVALID_REQUEST
        assert response["id"] == "abc"


class TestRouting:
    async def test_initialize(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 1, "method": "initialize"})
        assert response["id"] == 1
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"]["tools"] == {}
        assert result["serverInfo"] == {
            "name": "Test MCP Server",
            "version": "1.0.0",
            "description": "Dispatcher under test",
        }
        assert "error" not in response

    async def test_tools_list_is_stable(self, dispatcher: Dispatcher) -> None:
        first = await dispatcher.handle({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        second = await dispatcher.handle({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
        assert first["result"] == second["result"]
        names = [tool["name"] for tool in first["result"]["tools"]]
        assert names == ["echo", "explode", "crash", "act"]
        assert first["result"]["tools"][0]["inputSchema"]["required"] == ["message"]

    async def test_tools_list_opens_no_session(self, dispatcher: Dispatcher, sessions: SessionTracker) -> None:
        await dispatcher.handle({"id": 1, "method": "tools/list"})
        await dispatcher.handle({"id": 2, "method": "initialize"})
        assert sessions.opened == 0

    async def test_unknown_method(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 9, "method": "resources/list"})
        assert response["id"] == 9
        assert response["error"]["code"] == ERROR_METHOD_NOT_FOUND
        assert "resources/list" in response["error"]["message"]

    @pytest.mark.parametrize("request_id", [0, 42, "req-1", ""])
    @pytest.mark.parametrize("method", ["initialize", "tools/list", "tools/call", "nope"])
    async def test_id_round_trips(self, dispatcher: Dispatcher, request_id: int | str, method: str) -> None:
        params = {"name": "echo", "arguments": {"message": "hi"}}
        response = await dispatcher.handle({"id": request_id, "method": method, "params": params})
        assert response["id"] == request_id
        assert ("result" in response) != ("error" in response)


class TestToolsCall:
    async def test_success_wraps_result_as_text(self, dispatcher: Dispatcher, sessions: SessionTracker) -> None:
        response = await dispatcher.handle({
            "id": 2,
            "method": "tools/call",
            "params": {"name": "echo", "arguments": {"message": "ab", "times": 2}},
        })
        result = response["result"]
        assert result["isError"] is False
        assert result["content"][0]["type"] == "text"
        assert json.loads(result["content"][0]["text"]) == {"echo": "abab"}
        assert sessions.opened == sessions.closed == 1

    async def test_unknown_tool(self, dispatcher: Dispatcher, sessions: SessionTracker) -> None:
        response = await dispatcher.handle({
            "id": 3,
            "method": "tools/call",
            "params": {"name": "bogus_tool", "arguments": {}},
        })
        assert response["id"] == 3
        assert response["error"]["code"] == ERROR_METHOD_NOT_FOUND
        assert "bogus_tool" in response["error"]["message"]
        assert sessions.opened == 0

    async def test_missing_params(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"id": 4, "method": "tools/call"})
        assert response["error"]["code"] == ERROR_INVALID_PARAMS

    async def test_invalid_arguments_rejected_before_session(
        self, dispatcher: Dispatcher, sessions: SessionTracker
    ) -> None:
        response = await dispatcher.handle({
            "id": 5,
            "method": "tools/call",
            "params": {"name": "echo", "arguments": {"times": "many"}},
        })
        error = response["error"]
        assert error["code"] == ERROR_INVALID_PARAMS
        assert "echo" in error["message"]
        locs = {item["loc"] for item in error["data"]["errors"]}
        assert locs == {"message", "times"}
        assert sessions.opened == 0

    async def test_arguments_default_to_empty(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"id": 6, "method": "tools/call", "params": {"name": "act"}})
        assert "result" in response

    async def test_upstream_error(self, dispatcher: Dispatcher, sessions: SessionTracker) -> None:
        response = await dispatcher.handle({"id": 7, "method": "tools/call", "params": {"name": "explode"}})
        error = response["error"]
        assert error["code"] == ERROR_SERVER_ERROR
        assert error["message"] == "Tool execution failed: GitHub API error (404): Not Found"
        assert error["data"] == {"status": 404}
        assert sessions.opened == sessions.closed == 1

    async def test_unexpected_error_is_shaped(self, dispatcher: Dispatcher, sessions: SessionTracker) -> None:
        response = await dispatcher.handle({"id": 8, "method": "tools/call", "params": {"name": "crash"}})
        assert response["id"] == 8
        assert response["error"]["code"] == ERROR_SERVER_ERROR
        assert response["error"]["message"].startswith("Tool execution failed:")
        assert sessions.closed == 1

    async def test_action_failure_reported_in_body(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"id": 9, "method": "tools/call", "params": {"name": "act"}})
        result = response["result"]
        assert result["isError"] is True
        assert json.loads(result["content"][0]["text"]) == {
            "success": False,
            "message": "Element not found or not visible: #go",
        }

    async def test_configuration_error(self) -> None:
        tracker = SessionTracker(fail_with=ConfigurationError("GitHub token not configured"))
        dispatcher = Dispatcher(_registry(), INFO, tracker)
        response = await dispatcher.handle({
            "id": 10,
            "method": "tools/call",
            "params": {"name": "echo", "arguments": {"message": "x"}},
        })
        assert response["id"] == 10
        assert response["error"] == {"code": ERROR_SERVER_ERROR, "message": "GitHub token not configured"}

    async def test_configuration_does_not_affect_list(self) -> None:
        tracker = SessionTracker(fail_with=ConfigurationError("GitHub token not configured"))
        dispatcher = Dispatcher(_registry(), INFO, tracker)
        response = await dispatcher.handle({"id": 11, "method": "tools/list"})
        assert len(response["result"]["tools"]) == 4
