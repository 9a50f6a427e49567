"""GitHubClient: thin async wrapper around the GitHub REST API v3."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from mcpbridge.mcp.errors import UpstreamError

DEFAULT_BASE_URL = "https://api.github.com"
USER_AGENT = "GitHub-MCP-Server/1.0.0"


def _query(**params: Any) -> dict[str, Any]:
    """Drop unset query parameters instead of sending defaults."""
    return {key: value for key, value in params.items() if value is not None}


def _body(**fields: Any) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _seg(value: str) -> str:
    return quote(str(value), safe="")


class GitHubClient:
    """One authenticated session against the GitHub API.

    One exported method maps to exactly one HTTP call. Any non-2xx reply
    raises :class:`UpstreamError` carrying the status and response text.

    Usage::

        async with GitHubClient(token) as github:
            repo = await github.get_repository("acme", "widgets")
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": USER_AGENT,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "GitHubClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._http().request(method, endpoint, params=params or None, json=json)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"GitHub API request failed: {exc}") from exc
        if not response.is_success:
            raise UpstreamError(
                f"GitHub API error ({response.status_code}): {response.text}",
                status=response.status_code,
            )
        if not response.content:
            return None
        return response.json()

    # -- Repositories -----------------------------------------------------

    async def list_repositories(
        self,
        owner: str | None = None,
        type: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[dict[str, Any]]:
        endpoint = f"/users/{_seg(owner)}/repos" if owner else "/user/repos"
        params = _query(type=type, sort=sort, direction=direction, per_page=per_page, page=page)
        return await self._request("GET", endpoint, params=params)

    async def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        return await self._request("GET", f"/repos/{_seg(owner)}/{_seg(repo)}")

    async def create_repository(self, name: str, **options: Any) -> dict[str, Any]:
        return await self._request("POST", "/user/repos", json=_body(name=name, **options))

    async def delete_repository(self, owner: str, repo: str) -> None:
        await self._request("DELETE", f"/repos/{_seg(owner)}/{_seg(repo)}")

    # -- Issues -----------------------------------------------------------

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        labels: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[dict[str, Any]]:
        params = _query(
            state=state, labels=labels, sort=sort, direction=direction, per_page=per_page, page=page
        )
        return await self._request("GET", f"/repos/{_seg(owner)}/{_seg(repo)}/issues", params=params)

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        return await self._request("GET", f"/repos/{_seg(owner)}/{_seg(repo)}/issues/{issue_number}")

    async def create_issue(self, owner: str, repo: str, title: str, **fields: Any) -> dict[str, Any]:
        return await self._request(
            "POST", f"/repos/{_seg(owner)}/{_seg(repo)}/issues", json=_body(title=title, **fields)
        )

    async def update_issue(
        self, owner: str, repo: str, issue_number: int, **updates: Any
    ) -> dict[str, Any]:
        return await self._request(
            "PATCH",
            f"/repos/{_seg(owner)}/{_seg(repo)}/issues/{issue_number}",
            json=_body(**updates),
        )

    async def close_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        return await self.update_issue(owner, repo, issue_number, state="closed")

    # -- Pull requests ----------------------------------------------------

    async def list_pull_requests(
        self, owner: str, repo: str, state: str = "open"
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET", f"/repos/{_seg(owner)}/{_seg(repo)}/pulls", params={"state": state}
        )

    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        return await self._request("GET", f"/repos/{_seg(owner)}/{_seg(repo)}/pulls/{pull_number}")

    async def create_pull_request(
        self, owner: str, repo: str, title: str, head: str, base: str, **fields: Any
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/repos/{_seg(owner)}/{_seg(repo)}/pulls",
            json=_body(title=title, head=head, base=base, **fields),
        )

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        commit_title: str | None = None,
        commit_message: str | None = None,
        merge_method: str = "merge",
    ) -> dict[str, Any]:
        body = _body(
            merge_method=merge_method,
            commit_title=commit_title or None,
            commit_message=commit_message or None,
        )
        return await self._request(
            "PUT", f"/repos/{_seg(owner)}/{_seg(repo)}/pulls/{pull_number}/merge", json=body
        )

    # -- Search -----------------------------------------------------------

    async def search_repositories(
        self, query: str, sort: str | None = None, order: str | None = None
    ) -> list[dict[str, Any]]:
        result = await self._request(
            "GET", "/search/repositories", params=_query(q=query, sort=sort, order=order)
        )
        return result["items"]

    async def search_issues(
        self, query: str, sort: str | None = None, order: str | None = None
    ) -> list[dict[str, Any]]:
        result = await self._request(
            "GET", "/search/issues", params=_query(q=query, sort=sort, order=order)
        )
        return result["items"]

    # -- Users ------------------------------------------------------------

    async def get_authenticated_user(self) -> dict[str, Any]:
        return await self._request("GET", "/user")

    async def get_user(self, username: str) -> dict[str, Any]:
        return await self._request("GET", f"/users/{_seg(username)}")
