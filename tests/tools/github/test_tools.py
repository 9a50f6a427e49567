"""GitHub tools through the dispatcher, upstream faked with httpx.MockTransport."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager

import httpx
import pytest

from mcpbridge.mcp.dispatcher import Dispatcher
from mcpbridge.tools import github
from mcpbridge.tools.base import ToolRegistry
from mcpbridge.tools.github.client import GitHubClient

REPO = {"id": 1, "name": "widgets", "full_name": "acme/widgets", "language": "Python"}

EXPECTED_TOOLS = [
    "list_repositories",
    "get_repository",
    "create_repository",
    "list_issues",
    "get_issue",
    "create_issue",
    "update_issue",
    "close_issue",
    "list_pull_requests",
    "get_pull_request",
    "create_pull_request",
    "merge_pull_request",
    "search_repositories",
    "search_issues",
    "get_user",
]


class Upstream:
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/repos/acme/private":
            return httpx.Response(403, text="Resource not accessible by integration")
        if request.url.path.startswith("/search/"):
            return httpx.Response(200, json={"items": [REPO]})
        if request.url.path == "/user":
            return httpx.Response(200, json={"login": "me"})
        return httpx.Response(200, json=REPO)


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def dispatcher(upstream: Upstream) -> Dispatcher:
    registry = ToolRegistry()
    github.register(registry)

    @asynccontextmanager
    async def session():
        async with GitHubClient("ghp_test", transport=httpx.MockTransport(upstream)) as client:
            yield client

    return Dispatcher(registry, github.SERVER_INFO, session)


async def _call(dispatcher: Dispatcher, name: str, arguments: dict, request_id: int = 1) -> dict:
    return await dispatcher.handle({
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    })


def test_catalog() -> None:
    registry = ToolRegistry()
    github.register(registry)
    assert list(registry) == EXPECTED_TOOLS
    for descriptor in registry.list_tools():
        assert set(descriptor) == {"name", "description", "inputSchema"}
        assert descriptor["inputSchema"]["type"] == "object"


async def test_get_repository_scenario(dispatcher: Dispatcher) -> None:
    response = await _call(dispatcher, "get_repository", {"owner": "acme", "repo": "widgets"}, request_id=2)
    assert response["id"] == 2
    text = response["result"]["content"][0]["text"]
    assert json.loads(text) == REPO
    assert text == json.dumps(REPO, indent=2)


async def test_missing_required_argument(dispatcher: Dispatcher, upstream: Upstream) -> None:
    response = await _call(dispatcher, "get_repository", {"owner": "acme"})
    assert response["error"]["code"] == -32602
    assert upstream.requests == []


async def test_enum_is_enforced(dispatcher: Dispatcher, upstream: Upstream) -> None:
    response = await _call(dispatcher, "list_issues", {"owner": "acme", "repo": "widgets", "state": "merged"})
    assert response["error"]["code"] == -32602
    assert upstream.requests == []


async def test_upstream_failure_is_server_error(dispatcher: Dispatcher) -> None:
    response = await _call(dispatcher, "get_repository", {"owner": "acme", "repo": "private"})
    error = response["error"]
    assert error["code"] == -32000
    assert error["message"] == "Tool execution failed: GitHub API error (403): Resource not accessible by integration"
    assert error["data"] == {"status": 403}


async def test_list_repositories_forwards_only_given_params(dispatcher: Dispatcher, upstream: Upstream) -> None:
    await _call(dispatcher, "list_repositories", {"owner": "acme", "direction": "asc"})
    request = upstream.requests[-1]
    assert request.url.path == "/users/acme/repos"
    assert dict(request.url.params) == {"direction": "asc"}


async def test_create_issue_body(dispatcher: Dispatcher, upstream: Upstream) -> None:
    await _call(dispatcher, "create_issue", {
        "owner": "acme",
        "repo": "widgets",
        "title": "Crash on start",
        "labels": ["bug"],
    })
    request = upstream.requests[-1]
    assert request.method == "POST"
    assert request.url.path == "/repos/acme/widgets/issues"
    assert json.loads(request.content) == {"title": "Crash on start", "labels": ["bug"]}


async def test_update_issue_sends_only_changes(dispatcher: Dispatcher, upstream: Upstream) -> None:
    await _call(dispatcher, "update_issue", {"owner": "acme", "repo": "widgets", "issue_number": 4, "title": "New"})
    request = upstream.requests[-1]
    assert request.method == "PATCH"
    assert json.loads(request.content) == {"title": "New"}


async def test_create_pull_request(dispatcher: Dispatcher, upstream: Upstream) -> None:
    await _call(dispatcher, "create_pull_request", {
        "owner": "acme",
        "repo": "widgets",
        "title": "Add feature",
        "head": "feature",
        "base": "main",
        "draft": True,
    })
    request = upstream.requests[-1]
    assert request.url.path == "/repos/acme/widgets/pulls"
    assert json.loads(request.content) == {"title": "Add feature", "head": "feature", "base": "main", "draft": True}


async def test_search_issues_returns_items(dispatcher: Dispatcher) -> None:
    response = await _call(dispatcher, "search_issues", {"query": "is:open label:bug"})
    assert json.loads(response["result"]["content"][0]["text"]) == [REPO]


async def test_get_user_without_username(dispatcher: Dispatcher, upstream: Upstream) -> None:
    response = await _call(dispatcher, "get_user", {})
    assert upstream.requests[-1].url.path == "/user"
    assert json.loads(response["result"]["content"][0]["text"]) == {"login": "me"}
