"""mcpbridge CLI entrypoint."""

from __future__ import annotations

import json

import click
from dotenv import load_dotenv

from mcpbridge import __version__
from mcpbridge.config import Settings
from mcpbridge.services import SERVICE_KEYS, build_service

SERVICE = click.Choice(SERVICE_KEYS)


@click.group()
@click.version_option(version=__version__, prog_name="mcpbridge")
def main() -> None:
    """mcpbridge: MCP tool servers for GitHub, browser automation and Figma."""
    load_dotenv()


@main.command()
@click.argument("service", type=SERVICE)
@click.option("--host", default=None, help="Bind address (default MCP_HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Bind port (default MCP_PORT or 8000).")
@click.option("--log-level", default=None, help="Log level (default MCP_LOG_LEVEL or INFO).")
def serve(service: str, host: str | None, port: int | None, log_level: str | None) -> None:
    """Serve SERVICE's tools over HTTP on /mcp."""
    import uvicorn

    from mcpbridge.logging_config import setup_logging
    from mcpbridge.main import create_app

    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level
    setup_logging(settings.log_level)

    app = create_app(build_service(service, settings), settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@main.command()
@click.argument("service", type=SERVICE)
def tools(service: str) -> None:
    """Print SERVICE's tool catalog as JSON."""
    catalog = build_service(service, Settings.from_env()).registry.list_tools()
    click.echo(json.dumps(catalog, indent=2))


if __name__ == "__main__":
    main()
