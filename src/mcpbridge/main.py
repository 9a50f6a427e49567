"""
mcpbridge - FastAPI application factory.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings
from .mcp.server import create_router
from .services import Service

logger = logging.getLogger(__name__)


def create_app(service: Service, settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app serving one service on /mcp."""
    settings = settings or Settings()
    info = service.server_info

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the browser (if any) and log the loaded catalog."""
        logger.info(f"{info.name} starting...")
        if service.browser_provider is not None:
            await service.browser_provider.start()

        logger.info(
            f"Loaded {len(service.registry)} tools",
            extra={"service": service.key, "tools": list(service.registry)}
        )
        try:
            yield
        finally:
            if service.browser_provider is not None:
                await service.browser_provider.stop()

    # Create FastAPI app
    app = FastAPI(
        title=info.name,
        description=info.description,
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Include MCP router
    app.include_router(create_router(service.dispatcher()))

    @app.get("/")
    async def root():
        """Server info endpoint."""
        body = {
            "name": info.name,
            "version": info.version,
            "description": info.description,
            "author": info.author,
            "endpoints": {
                "mcp": "/mcp",
                "health": "/health"
            }
        }
        if info.capabilities:
            body["capabilities"] = info.capabilities
        return body

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        body = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if info.capabilities:
            body["capabilities"] = info.capabilities
        return body

    return app
