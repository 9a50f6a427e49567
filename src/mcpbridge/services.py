"""
Service assembly - one catalog, one server info and one session factory per
upstream service.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Optional

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from .config import Settings
from .mcp.dispatcher import Dispatcher, SessionFactory
from .mcp.errors import ConfigurationError
from .mcp.models import ServerInfo
from .tools import browser, figma, github
from .tools.base import ToolRegistry
from .tools.browser.client import BrowserClient
from .tools.figma.client import FigmaClient
from .tools.github.client import GitHubClient

logger = logging.getLogger(__name__)

SERVICE_KEYS = ("github", "browser", "figma")


class BrowserProvider:
    """
    Owns the process-wide Playwright browser handle.
    Pages are opened per request by BrowserClient; the browser itself lives
    from app startup to shutdown.
    """

    def __init__(self, ws_endpoint: Optional[str] = None, headless: bool = True) -> None:
        self.ws_endpoint = ws_endpoint
        self.headless = headless
        self.browser: Optional[Browser] = None
        self._playwright: Optional[Playwright] = None

    async def start(self) -> None:
        try:
            self._playwright = await async_playwright().start()
            if self.ws_endpoint:
                self.browser = await self._playwright.chromium.connect_over_cdp(self.ws_endpoint)
            else:
                self.browser = await self._playwright.chromium.launch(headless=self.headless)
            logger.info("Browser ready", extra={"cdp": bool(self.ws_endpoint)})
        except PlaywrightError:
            # tools/call will answer "Browser not available" until restart
            logger.exception("Could not start browser")
            await self.stop()

    async def stop(self) -> None:
        if self.browser is not None:
            await self.browser.close()
            self.browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None


@dataclass
class Service:
    """Everything the generic dispatcher needs for one upstream service."""
    key: str
    server_info: ServerInfo
    registry: ToolRegistry
    session_factory: SessionFactory
    browser_provider: Optional[BrowserProvider] = field(default=None)

    def dispatcher(self) -> Dispatcher:
        return Dispatcher(self.registry, self.server_info, self.session_factory)


def github_session(settings: Settings) -> SessionFactory:
    @asynccontextmanager
    async def session() -> AsyncIterator[GitHubClient]:
        if not settings.github_token:
            raise ConfigurationError("GitHub token not configured")
        async with GitHubClient(
            settings.github_token,
            base_url=settings.github_api_url,
            timeout=settings.http_timeout
        ) as client:
            yield client

    return session


def figma_session(settings: Settings) -> SessionFactory:
    @asynccontextmanager
    async def session() -> AsyncIterator[FigmaClient]:
        if not settings.figma_token:
            raise ConfigurationError("Figma token not configured")
        async with FigmaClient(
            settings.figma_token,
            base_url=settings.figma_api_url,
            timeout=settings.http_timeout
        ) as client:
            yield client

    return session


def browser_session(get_browser: Callable[[], Any]) -> SessionFactory:
    @asynccontextmanager
    async def session() -> AsyncIterator[BrowserClient]:
        handle = get_browser()
        if handle is None:
            raise ConfigurationError("Browser not available")
        yield BrowserClient(handle)

    return session


def build_service(key: str, settings: Settings) -> Service:
    """
    Build the named service.

    Raises:
        ValueError: If key is not one of SERVICE_KEYS
    """
    registry = ToolRegistry()

    if key == "github":
        github.register(registry)
        return Service(key, github.SERVER_INFO, registry, github_session(settings))

    if key == "figma":
        figma.register(registry)
        return Service(key, figma.SERVER_INFO, registry, figma_session(settings))

    if key == "browser":
        browser.register(registry)
        provider = BrowserProvider(settings.browser_ws_endpoint, settings.browser_headless)
        return Service(
            key,
            browser.SERVER_INFO,
            registry,
            browser_session(lambda: provider.browser),
            browser_provider=provider
        )

    raise ValueError(f"Unknown service '{key}', expected one of: {', '.join(SERVICE_KEYS)}")
