"""
Pydantic schemas for browser tool arguments and results.
Field names follow the camelCase names agents send on the wire.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from ..schemas import ToolArguments

WaitUntil = Literal["load", "domcontentloaded", "networkidle0", "networkidle2"]


class WaitOptions(ToolArguments):
    """How long and for what to wait after navigation."""

    timeout: int = Field(default=30000, gt=0, description="Wait timeout in ms")
    waitUntil: WaitUntil = Field(default="networkidle2", description="Wait condition")


class Clip(ToolArguments):
    x: float
    y: float
    width: float
    height: float


class ScreenshotOptions(ToolArguments):
    width: Optional[int] = Field(default=None, gt=0, description="Viewport width")
    height: Optional[int] = Field(default=None, gt=0, description="Viewport height")
    fullPage: bool = True
    format: Literal["png", "jpeg"] = "png"
    quality: Optional[int] = Field(default=None, ge=0, le=100, description="JPEG quality (0-100)")
    clip: Optional[Clip] = None


class ElementScreenshotOptions(ToolArguments):
    format: Literal["png", "jpeg"] = "png"
    quality: Optional[int] = Field(default=None, ge=0, le=100)


class Margin(ToolArguments):
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None


class PDFOptions(ToolArguments):
    format: Literal["A4", "A3", "A5", "Legal", "Letter", "Tabloid"] = "A4"
    width: Optional[str] = None
    height: Optional[str] = None
    margin: Optional[Margin] = None
    printBackground: bool = True
    landscape: bool = False


class PageArgs(ToolArguments):
    """Arguments shared by every browser tool: the page to open."""

    url: str = Field(min_length=1)
    waitOptions: Optional[WaitOptions] = None


class ScreenshotArgs(PageArgs):
    options: ScreenshotOptions = Field(default_factory=ScreenshotOptions)


class ElementScreenshotArgs(PageArgs):
    selector: str = Field(min_length=1)
    options: ElementScreenshotOptions = Field(default_factory=ElementScreenshotOptions)


class PDFArgs(PageArgs):
    options: PDFOptions = Field(default_factory=PDFOptions)


class ScrapeArgs(PageArgs):
    selectors: dict[str, str]


class ExtractTextArgs(PageArgs):
    selector: Optional[str] = None


class FormData(ToolArguments):
    selector: str = Field(min_length=1, description="Form CSS selector")
    fields: dict[str, str] = Field(description="Field selector -> value")


class FillFormArgs(PageArgs):
    formData: FormData


class ClickElementArgs(PageArgs):
    selector: str = Field(min_length=1)


class WaitForElementArgs(ToolArguments):
    url: str = Field(min_length=1)
    selector: str = Field(min_length=1)
    timeout: int = Field(default=30000, gt=0, description="Timeout in milliseconds")


# ============ RESULTS ============

class LinkData(BaseModel):
    text: str
    href: str
    title: Optional[str] = None


class ImageData(BaseModel):
    src: str
    alt: Optional[str] = None
    title: Optional[str] = None


class ScrapingResult(BaseModel):
    url: str
    title: str
    data: dict[str, Any]
    timestamp: str
