"""
Error types raised below the dispatcher.
The dispatcher maps each of them to a JSON-RPC error code.
"""
from typing import Any, Optional


class MCPBridgeError(Exception):
    """Base error for all mcpbridge failures."""


class ConfigurationError(MCPBridgeError):
    """A required credential or capability is missing."""


class UpstreamError(MCPBridgeError):
    """The upstream service (REST API or browser) failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class InvalidArgumentsError(MCPBridgeError):
    """Tool arguments did not match the tool's argument model."""

    def __init__(self, tool_name: str, errors: list[dict[str, Any]]) -> None:
        self.tool_name = tool_name
        self.errors = errors
        super().__init__(f"Invalid arguments for tool '{tool_name}'")
