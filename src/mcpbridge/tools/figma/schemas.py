"""
Pydantic argument models for the Figma tools.
"""
from typing import Literal

from pydantic import Field

from ..schemas import ToolArguments


class FileArgs(ToolArguments):
    fileId: str = Field(min_length=1, description="Figma file ID")


class ExportAssetsArgs(FileArgs):
    nodeIds: list[str] = Field(min_length=1, description="Node IDs to export")
    format: Literal["png", "jpg", "svg", "pdf"] = "png"
