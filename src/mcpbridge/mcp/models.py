"""
MCP protocol models - JSON-RPC 2.0 format.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, Field, StrictInt, StrictStr


PROTOCOL_VERSION = "2024-11-05"


# ============ BASE MODELS ============

class MCPRequest(BaseModel):
    """Base request - all MCP requests have these fields."""
    jsonrpc: str = Field(default="2.0")
    id: Union[StrictInt, StrictStr] = Field(...)
    method: str = Field(...)
    params: Optional[dict[str, Any]] = Field(default=None)


class MCPError(BaseModel):
    """Error structure."""
    code: int = Field(...)
    message: str = Field(...)
    data: Optional[Any] = Field(default=None)


class MCPResponse(BaseModel):
    """
    Base response - all MCP responses have these fields.
    Exactly one of result/error is set; dump with exclude_none.
    """
    jsonrpc: str = Field(default="2.0")
    id: Union[StrictInt, StrictStr] = Field(...)
    result: Optional[dict[str, Any]] = Field(default=None)
    error: Optional[MCPError] = Field(default=None)


# ============ TOOLS/CALL ============

class ToolCallParams(BaseModel):
    """Params of a tools/call request."""
    name: str = Field(...)
    arguments: dict[str, Any] = Field(default_factory=dict)


# ============ INITIALIZE ============

class ServerInfo(BaseModel):
    """Static metadata returned by initialize and GET /."""
    name: str
    version: str = "1.0.0"
    description: str
    author: str = "Philip S Wright"
    capabilities: list[str] = Field(default_factory=list)


# Error codes
ERROR_PARSE_ERROR = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL_ERROR = -32603
ERROR_SERVER_ERROR = -32000
