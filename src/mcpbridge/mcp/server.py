"""
MCP server - FastAPI routes for JSON-RPC requests.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from .dispatcher import Dispatcher


def create_router(dispatcher: Dispatcher) -> APIRouter:
    """Build the /mcp router for one service's dispatcher."""
    router = APIRouter()

    @router.post("/mcp")
    async def mcp_endpoint(request: Request) -> JSONResponse:
        """
        Main MCP endpoint.
        The body is read raw so malformed JSON still gets a JSON-RPC reply.
        """
        body = await request.body()
        return JSONResponse(await dispatcher.handle_raw(body))

    return router
