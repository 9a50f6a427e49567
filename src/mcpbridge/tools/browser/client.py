"""BrowserClient: page-level operations on a Playwright browser handle."""

from __future__ import annotations

import base64
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from mcpbridge.mcp.errors import UpstreamError
from mcpbridge.tools.browser.schemas import (
    ElementScreenshotArgs,
    FillFormArgs,
    ImageData,
    LinkData,
    PDFArgs,
    ScrapeArgs,
    ScrapingResult,
    ScreenshotArgs,
    WaitOptions,
)
from mcpbridge.tools.schemas import ActionResult

logger = logging.getLogger(__name__)

# Playwright has a single network-idle state.
LOAD_STATES = {
    "load": "load",
    "domcontentloaded": "domcontentloaded",
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
}

FORM_SUBMIT_TIMEOUT = 10000
CLICK_SETTLE_TIMEOUT = 5000


def _data_url(mime: str, payload: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


class BrowserClient:
    """Runs bounded action sequences against one browser.

    Every operation opens its own page through :meth:`page` and the page is
    closed on every exit path. Data operations raise :class:`UpstreamError`
    on failure; action operations (fill, click, wait) return an
    :class:`ActionResult` instead.
    """

    def __init__(self, browser: Browser) -> None:
        self._browser = browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        page = await self._browser.new_page()
        try:
            yield page
        finally:
            await page.close()

    async def _wait_for_page_load(self, page: Page, wait: WaitOptions | None = None) -> None:
        wait = wait or WaitOptions()
        try:
            await page.wait_for_load_state(LOAD_STATES[wait.waitUntil], timeout=wait.timeout)
        except PlaywrightTimeoutError:
            logger.warning("Page load timeout, continuing anyway", extra={"url": page.url})

    async def _open(self, page: Page, url: str, wait: WaitOptions | None = None) -> None:
        timeout = (wait or WaitOptions()).timeout
        try:
            await page.goto(url, timeout=timeout)
        except PlaywrightError as exc:
            raise UpstreamError(f"Navigation to {url} failed: {exc}") from exc
        await self._wait_for_page_load(page, wait)

    # -- Screenshots and PDF ----------------------------------------------

    async def take_screenshot(self, request: ScreenshotArgs) -> str:
        options = request.options
        async with self.page() as page:
            if options.width and options.height:
                await page.set_viewport_size({"width": options.width, "height": options.height})

            await self._open(page, request.url, request.waitOptions)

            screenshot_options: dict[str, Any] = {
                "full_page": options.fullPage,
                "type": options.format,
            }
            if options.quality is not None and options.format == "jpeg":
                screenshot_options["quality"] = options.quality
            if options.clip:
                screenshot_options["clip"] = options.clip.model_dump()

            screenshot = await page.screenshot(**screenshot_options)
            return _data_url(f"image/{options.format}", screenshot)

    async def take_element_screenshot(self, request: ElementScreenshotArgs) -> str:
        options = request.options
        async with self.page() as page:
            await self._open(page, request.url, request.waitOptions)

            element = page.locator(request.selector).first
            if await element.count() == 0:
                raise UpstreamError(f"Element not found: {request.selector}")

            screenshot_options: dict[str, Any] = {"type": options.format}
            if options.quality is not None and options.format == "jpeg":
                screenshot_options["quality"] = options.quality

            screenshot = await element.screenshot(**screenshot_options)
            return _data_url(f"image/{options.format}", screenshot)

    async def generate_pdf(self, request: PDFArgs) -> str:
        options = request.options
        async with self.page() as page:
            await self._open(page, request.url, request.waitOptions)

            pdf_options: dict[str, Any] = {
                "format": options.format,
                "print_background": options.printBackground,
                "landscape": options.landscape,
            }
            if options.margin:
                pdf_options["margin"] = options.margin.model_dump(exclude_none=True)
            if options.width and options.height:
                pdf_options["width"] = options.width
                pdf_options["height"] = options.height

            pdf = await page.pdf(**pdf_options)
            return _data_url("application/pdf", pdf)

    # -- Extraction -------------------------------------------------------

    async def scrape_data(self, request: ScrapeArgs) -> ScrapingResult:
        async with self.page() as page:
            await self._open(page, request.url, request.waitOptions)

            title = await page.title()
            data: dict[str, Any] = {}

            for key, selector in request.selectors.items():
                element = page.locator(selector).first
                if await element.count() == 0:
                    data[key] = {"error": f"Element not found: {selector}"}
                    continue
                try:
                    text = await element.text_content()
                    data[key] = {
                        "text": text.strip() if text else text,
                        "html": await element.inner_html(),
                        "href": await element.get_attribute("href"),
                        "src": await element.get_attribute("src"),
                    }
                except PlaywrightError as exc:
                    logger.warning("Failed to read %s: %s", selector, exc)
                    data[key] = {"error": f"Failed to read {selector}: {exc}"}

            return ScrapingResult(
                url=request.url,
                title=title,
                data=data,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )

    async def extract_links(self, url: str, wait: WaitOptions | None = None) -> list[LinkData]:
        async with self.page() as page:
            await self._open(page, url, wait)

            links: list[LinkData] = []
            for link in await page.locator("a[href]").all():
                href = await link.get_attribute("href")
                if not href:
                    continue
                text = await link.text_content()
                links.append(LinkData(
                    href=href,
                    text=(text or "").strip(),
                    title=await link.get_attribute("title") or None,
                ))
            return links

    async def extract_images(self, url: str, wait: WaitOptions | None = None) -> list[ImageData]:
        async with self.page() as page:
            await self._open(page, url, wait)

            images: list[ImageData] = []
            for img in await page.locator("img[src]").all():
                src = await img.get_attribute("src")
                if not src:
                    continue
                images.append(ImageData(
                    src=src,
                    alt=await img.get_attribute("alt") or None,
                    title=await img.get_attribute("title") or None,
                ))
            return images

    async def extract_text(
        self, url: str, selector: str | None = None, wait: WaitOptions | None = None
    ) -> str:
        async with self.page() as page:
            await self._open(page, url, wait)

            element = page.locator(selector or "body").first
            if await element.count() == 0:
                raise UpstreamError(f"Element not found: {selector}")
            text = await element.text_content()
            return (text or "").strip()

    # -- Interaction ------------------------------------------------------

    async def fill_form(self, request: FillFormArgs) -> ActionResult:
        async with self.page() as page:
            try:
                await self._open(page, request.url, request.waitOptions)

                for field_selector, value in request.formData.fields.items():
                    field = page.locator(field_selector).first
                    if await field.is_visible():
                        await field.fill(value)
                    else:
                        logger.warning("Field not found or not visible: %s", field_selector)

                form = page.locator(request.formData.selector).first
                if await form.count() == 0:
                    return ActionResult(success=False, message=f"Form not found: {request.formData.selector}")
                await form.evaluate("f => f.requestSubmit ? f.requestSubmit() : f.submit()")

                await self._wait_for_page_load(page, WaitOptions(timeout=FORM_SUBMIT_TIMEOUT))
                return ActionResult(success=True, message="Form submitted successfully")
            except (PlaywrightError, UpstreamError) as exc:
                return ActionResult(success=False, message=str(exc))

    async def click_element(
        self, url: str, selector: str, wait: WaitOptions | None = None
    ) -> ActionResult:
        async with self.page() as page:
            try:
                await self._open(page, url, wait)

                element = page.locator(selector).first
                if not await element.is_visible():
                    return ActionResult(success=False, message=f"Element not found or not visible: {selector}")

                await element.click()
                await self._wait_for_page_load(page, WaitOptions(timeout=CLICK_SETTLE_TIMEOUT))
                return ActionResult(success=True, message="Element clicked successfully")
            except (PlaywrightError, UpstreamError) as exc:
                return ActionResult(success=False, message=str(exc))

    async def wait_for_element(self, url: str, selector: str, timeout: int = 30000) -> ActionResult:
        async with self.page() as page:
            try:
                await page.goto(url)
            except PlaywrightError as exc:
                return ActionResult(success=False, message=f"Navigation to {url} failed: {exc}")
            try:
                await page.locator(selector).first.wait_for(timeout=timeout)
            except PlaywrightTimeoutError:
                return ActionResult(success=False, message=f"Element not found within {timeout}ms: {selector}")
            except PlaywrightError as exc:
                return ActionResult(success=False, message=f"Waiting for {selector} failed: {exc}")
            return ActionResult(success=True, message="Element found")
