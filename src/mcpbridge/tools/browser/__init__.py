"""
Browser automation tools for the mcpbridge browser server.
"""
from ...mcp.models import ServerInfo
from ..base import ToolRegistry, object_schema
from .client import BrowserClient
from .schemas import (
    ClickElementArgs,
    ElementScreenshotArgs,
    ExtractTextArgs,
    FillFormArgs,
    PageArgs,
    PDFArgs,
    ScrapeArgs,
    ScreenshotArgs,
    WaitForElementArgs,
)

SERVER_INFO = ServerInfo(
    name="Puppeteer MCP Server",
    description="Web scraping and browser automation for Warp AI Terminal via MCP",
    capabilities=["screenshots", "pdf-generation", "web-scraping", "form-automation"],
)

_WAIT_OPTIONS = object_schema({
    "timeout": {"type": "number", "exclusiveMinimum": 0, "description": "Wait timeout in ms"},
    "waitUntil": {
        "type": "string",
        "enum": ["load", "domcontentloaded", "networkidle0", "networkidle2"],
        "description": "Wait condition",
    },
})
_IMAGE_FORMAT = {"type": "string", "enum": ["png", "jpeg"], "description": "Image format"}
_QUALITY = {"type": "number", "minimum": 0, "maximum": 100, "description": "JPEG quality (0-100)"}


def register(registry: ToolRegistry) -> None:
    """Register browser tools with the registry."""

    @registry.tool(
        name="take_screenshot",
        description="Take a screenshot of a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to screenshot"},
            "options": object_schema({
                "width": {"type": "number", "description": "Viewport width"},
                "height": {"type": "number", "description": "Viewport height"},
                "fullPage": {"type": "boolean", "description": "Capture full page"},
                "format": _IMAGE_FORMAT,
                "quality": _QUALITY,
                "clip": object_schema({
                    "x": {"type": "number"},
                    "y": {"type": "number"},
                    "width": {"type": "number"},
                    "height": {"type": "number"},
                }, ["x", "y", "width", "height"]),
            }),
            "waitOptions": _WAIT_OPTIONS,
        }, ["url"]),
        arguments=ScreenshotArgs,
    )
    async def take_screenshot(client: BrowserClient, args: ScreenshotArgs):
        return await client.take_screenshot(args)

    @registry.tool(
        name="screenshot_element",
        description="Take a screenshot of a specific element",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to visit"},
            "selector": {"type": "string", "description": "CSS selector for element"},
            "options": object_schema({"format": _IMAGE_FORMAT, "quality": _QUALITY}),
            "waitOptions": _WAIT_OPTIONS,
        }, ["url", "selector"]),
        arguments=ElementScreenshotArgs,
    )
    async def screenshot_element(client: BrowserClient, args: ElementScreenshotArgs):
        return await client.take_element_screenshot(args)

    @registry.tool(
        name="generate_pdf",
        description="Generate a PDF from a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to convert to PDF"},
            "options": object_schema({
                "format": {
                    "type": "string",
                    "enum": ["A4", "A3", "A5", "Legal", "Letter", "Tabloid"],
                    "description": "Paper format",
                },
                "width": {"type": "string", "description": "Paper width, overrides format"},
                "height": {"type": "string", "description": "Paper height, overrides format"},
                "landscape": {"type": "boolean", "description": "Landscape orientation"},
                "printBackground": {"type": "boolean", "description": "Include background graphics"},
                "margin": object_schema({
                    "top": {"type": "string", "description": "Top margin"},
                    "right": {"type": "string", "description": "Right margin"},
                    "bottom": {"type": "string", "description": "Bottom margin"},
                    "left": {"type": "string", "description": "Left margin"},
                }),
            }),
            "waitOptions": _WAIT_OPTIONS,
        }, ["url"]),
        arguments=PDFArgs,
    )
    async def generate_pdf(client: BrowserClient, args: PDFArgs):
        return await client.generate_pdf(args)

    @registry.tool(
        name="scrape_data",
        description="Scrape structured data from a web page using CSS selectors",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to scrape"},
            "selectors": {
                "type": "object",
                "description": "Key-value pairs of field names and CSS selectors",
                "additionalProperties": {"type": "string"},
            },
            "waitOptions": _WAIT_OPTIONS,
        }, ["url", "selectors"]),
        arguments=ScrapeArgs,
    )
    async def scrape_data(client: BrowserClient, args: ScrapeArgs):
        return await client.scrape_data(args)

    @registry.tool(
        name="extract_text",
        description="Extract text content from a web page or specific element",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to extract text from"},
            "selector": {"type": "string", "description": "Optional CSS selector for specific element"},
            "waitOptions": _WAIT_OPTIONS,
        }, ["url"]),
        arguments=ExtractTextArgs,
    )
    async def extract_text(client: BrowserClient, args: ExtractTextArgs):
        return await client.extract_text(args.url, args.selector, args.waitOptions)

    @registry.tool(
        name="extract_links",
        description="Extract all links from a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to extract links from"},
            "waitOptions": _WAIT_OPTIONS,
        }, ["url"]),
        arguments=PageArgs,
    )
    async def extract_links(client: BrowserClient, args: PageArgs):
        return await client.extract_links(args.url, args.waitOptions)

    @registry.tool(
        name="extract_images",
        description="Extract all images from a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to extract images from"},
            "waitOptions": _WAIT_OPTIONS,
        }, ["url"]),
        arguments=PageArgs,
    )
    async def extract_images(client: BrowserClient, args: PageArgs):
        return await client.extract_images(args.url, args.waitOptions)

    @registry.tool(
        name="fill_form",
        description="Fill and submit a form on a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL with the form"},
            "formData": object_schema({
                "selector": {"type": "string", "description": "Form CSS selector"},
                "fields": {
                    "type": "object",
                    "description": "Key-value pairs of field selectors and values",
                    "additionalProperties": {"type": "string"},
                },
            }, ["selector", "fields"]),
            "waitOptions": _WAIT_OPTIONS,
        }, ["url", "formData"]),
        arguments=FillFormArgs,
        reports_failure_in_result=True,
    )
    async def fill_form(client: BrowserClient, args: FillFormArgs):
        return await client.fill_form(args)

    @registry.tool(
        name="click_element",
        description="Click an element on a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to visit"},
            "selector": {"type": "string", "description": "CSS selector for element to click"},
            "waitOptions": _WAIT_OPTIONS,
        }, ["url", "selector"]),
        arguments=ClickElementArgs,
        reports_failure_in_result=True,
    )
    async def click_element(client: BrowserClient, args: ClickElementArgs):
        return await client.click_element(args.url, args.selector, args.waitOptions)

    @registry.tool(
        name="wait_for_element",
        description="Wait for an element to appear on a web page",
        input_schema=object_schema({
            "url": {"type": "string", "description": "URL to visit"},
            "selector": {"type": "string", "description": "CSS selector for element to wait for"},
            "timeout": {"type": "number", "exclusiveMinimum": 0, "description": "Timeout in milliseconds", "default": 30000},
        }, ["url", "selector"]),
        arguments=WaitForElementArgs,
        reports_failure_in_result=True,
    )
    async def wait_for_element(client: BrowserClient, args: WaitForElementArgs):
        return await client.wait_for_element(args.url, args.selector, args.timeout)
