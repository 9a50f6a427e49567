"""FigmaClient: async wrapper around the Figma REST API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from mcpbridge.mcp.errors import UpstreamError

DEFAULT_BASE_URL = "https://api.figma.com"
USER_AGENT = "Figma-MCP-Server/1.0.0"


class FigmaClient:
    """One authenticated session against the Figma API.

    Usage::

        async with FigmaClient(token) as figma:
            summary = await figma.get_file("FILE_KEY")
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

    async def __aenter__(self) -> FigmaClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "X-Figma-Token": self._token,
                "Accept": "application/json",
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
            msg = "FigmaClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            response = await self._http().get(endpoint, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Figma API request failed: {exc}") from exc
        if not response.is_success:
            raise UpstreamError(
                f"Figma API error ({response.status_code}): {response.text}",
                status=response.status_code,
            )
        return response.json()

    async def get_file(self, file_id: str) -> dict[str, Any]:
        """File metadata plus its top-level pages."""
        # depth=1 stops the document tree at pages.
        data = await self._get(f"/v1/files/{quote(file_id, safe='')}", params={"depth": 1})
        pages = [
            {"id": page.get("id"), "name": page.get("name")}
            for page in data.get("document", {}).get("children", [])
        ]
        return {
            "name": data.get("name"),
            "lastModified": data.get("lastModified"),
            "version": data.get("version"),
            "thumbnailUrl": data.get("thumbnailUrl"),
            "pages": pages,
        }

    async def list_components(self, file_id: str) -> list[dict[str, Any]]:
        data = await self._get(f"/v1/files/{quote(file_id, safe='')}/components")
        return [
            {
                "key": component.get("key"),
                "name": component.get("name"),
                "description": component.get("description"),
                "node_id": component.get("node_id"),
            }
            for component in data.get("meta", {}).get("components", [])
        ]

    async def export_assets(
        self, file_id: str, node_ids: list[str], format: str = "png"
    ) -> dict[str, Any]:
        """Render nodes and return a node id -> image URL map."""
        data = await self._get(
            f"/v1/images/{quote(file_id, safe='')}",
            params={"ids": ",".join(node_ids), "format": format},
        )
        if data.get("err"):
            raise UpstreamError(f"Figma export failed: {data['err']}")
        return {"format": format, "images": data.get("images", {})}
