"""
Runtime configuration read from the process environment.
Credentials only ever come from here, never from a request payload.
"""
import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CORS_ORIGINS = ["https://app.warp.dev"]
DEFAULT_CORS_ORIGIN_REGEX = r"https://.*\.warp\.dev"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Process-wide settings for every service."""

    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    figma_token: Optional[str] = None
    figma_api_url: str = "https://api.figma.com"
    browser_ws_endpoint: Optional[str] = None
    browser_headless: bool = True
    http_timeout: float = Field(default=30.0, description="Upstream REST timeout in seconds")
    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    cors_origin_regex: Optional[str] = DEFAULT_CORS_ORIGIN_REGEX
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (call load_dotenv() first)."""
        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or None,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            figma_token=os.getenv("FIGMA_TOKEN") or None,
            figma_api_url=os.getenv("FIGMA_API_URL", "https://api.figma.com"),
            browser_ws_endpoint=os.getenv("BROWSER_WS_ENDPOINT") or None,
            browser_headless=_env_bool("BROWSER_HEADLESS", True),
            http_timeout=float(os.getenv("MCP_HTTP_TIMEOUT", "30")),
            cors_origins=_env_list("MCP_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            # An explicit origin list replaces the Warp wildcard
            cors_origin_regex=None if os.getenv("MCP_CORS_ORIGINS") else DEFAULT_CORS_ORIGIN_REGEX,
            log_level=os.getenv("MCP_LOG_LEVEL", "INFO"),
            host=os.getenv("MCP_HOST", "0.0.0.0"),
            port=int(os.getenv("MCP_PORT", "8000")),
        )
