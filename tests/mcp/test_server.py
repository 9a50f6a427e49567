"""HTTP-level tests for the FastAPI app and the /mcp route."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from mcpbridge.config import Settings
from mcpbridge.main import create_app
from mcpbridge.services import Service, build_service
from mcpbridge.tools import github


class RepoStub:
    async def get_repository(self, owner: str, repo: str) -> dict:
        return {"full_name": f"{owner}/{repo}", "stargazers_count": 3}


@asynccontextmanager
async def stub_session():
    yield RepoStub()


@pytest.fixture
def github_app():
    service = build_service("github", Settings())
    stubbed = Service(service.key, service.server_info, service.registry, stub_session)
    return create_app(stubbed, Settings())


@pytest.fixture
def client(github_app) -> TestClient:
    return TestClient(github_app)


class TestMCPEndpoint:
    def test_initialize(self, client: TestClient) -> None:
        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "initialize"})
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert body["result"]["protocolVersion"] == "2024-11-05"
        assert "tools" in body["result"]["capabilities"]
        assert body["result"]["serverInfo"]["name"] == "GitHub MCP Server"

    def test_get_repository(self, client: TestClient) -> None:
        response = client.post("/mcp", json={
            "id": 2,
            "method": "tools/call",
            "params": {"name": "get_repository", "arguments": {"owner": "acme", "repo": "widgets"}},
        })
        body = response.json()
        assert body["id"] == 2
        record = json.loads(body["result"]["content"][0]["text"])
        assert record == {"full_name": "acme/widgets", "stargazers_count": 3}

    def test_unknown_tool(self, client: TestClient) -> None:
        response = client.post("/mcp", json={
            "id": 3,
            "method": "tools/call",
            "params": {"name": "bogus_tool", "arguments": {}},
        })
        body = response.json()
        assert body["error"]["code"] == -32601
        assert "bogus_tool" in body["error"]["message"]

    def test_malformed_body(self, client: TestClient) -> None:
        response = client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 200
        assert response.json() == {"jsonrpc": "2.0", "id": 0, "error": {"code": -32700, "message": "Parse error"}}

    def test_missing_token_is_configuration_error(self) -> None:
        app = create_app(build_service("github", Settings()), Settings())
        response = TestClient(app).post("/mcp", json={
            "id": 4,
            "method": "tools/call",
            "params": {"name": "get_repository", "arguments": {"owner": "acme", "repo": "widgets"}},
        })
        assert response.json()["error"] == {"code": -32000, "message": "GitHub token not configured"}


class TestInfoEndpoints:
    def test_health(self, client: TestClient) -> None:
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert "timestamp" in body

    def test_root(self, client: TestClient) -> None:
        body = client.get("/").json()
        assert body["name"] == "GitHub MCP Server"
        assert body["endpoints"] == {"mcp": "/mcp", "health": "/health"}

    def test_lifespan_logs_catalog(self, github_app) -> None:
        with TestClient(github_app) as client:
            assert client.get("/health").status_code == 200

    def test_cors_allows_warp_origins(self, client: TestClient) -> None:
        response = client.options(
            "/mcp",
            headers={
                "Origin": "https://preview.warp.dev",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.headers["access-control-allow-origin"] == "https://preview.warp.dev"


def test_catalog_matches_registered_tools() -> None:
    registry = build_service("github", Settings()).registry
    assert [tool["name"] for tool in registry.list_tools()] == list(registry)
    assert github.SERVER_INFO.name == "GitHub MCP Server"
