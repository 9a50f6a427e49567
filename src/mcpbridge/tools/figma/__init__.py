"""
Figma tools for the mcpbridge Figma server.
"""
from ...mcp.models import ServerInfo
from ..base import ToolRegistry, object_schema
from .client import FigmaClient
from .schemas import ExportAssetsArgs, FileArgs

SERVER_INFO = ServerInfo(
    name="Figma MCP Server",
    description="Figma integration for Warp AI Terminal via MCP",
)

_FILE_ID = {"type": "string", "description": "Figma file ID"}


def register(registry: ToolRegistry) -> None:
    """Register Figma tools with the registry."""

    @registry.tool(
        name="get_file",
        description="Get Figma file details",
        input_schema=object_schema({"fileId": _FILE_ID}, ["fileId"]),
        arguments=FileArgs,
    )
    async def get_file(client: FigmaClient, args: FileArgs):
        return await client.get_file(args.fileId)

    @registry.tool(
        name="list_components",
        description="List components in a Figma file",
        input_schema=object_schema({"fileId": _FILE_ID}, ["fileId"]),
        arguments=FileArgs,
    )
    async def list_components(client: FigmaClient, args: FileArgs):
        return await client.list_components(args.fileId)

    @registry.tool(
        name="export_assets",
        description="Export assets from Figma",
        input_schema=object_schema({
            "fileId": _FILE_ID,
            "nodeIds": {"type": "array", "items": {"type": "string"}, "description": "Node IDs to export"},
            "format": {"type": "string", "enum": ["png", "jpg", "svg", "pdf"], "description": "Export format"},
        }, ["fileId", "nodeIds"]),
        arguments=ExportAssetsArgs,
    )
    async def export_assets(client: FigmaClient, args: ExportAssetsArgs):
        return await client.export_assets(args.fileId, args.nodeIds, args.format)
