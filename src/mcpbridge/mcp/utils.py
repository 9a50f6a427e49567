"""
MCP utilities - response envelope builders.
"""
import json
from typing import Any, Optional, Union

from pydantic import BaseModel

from .models import (
    MCPError,
    MCPResponse,
    ServerInfo,
    PROTOCOL_VERSION,
)


def success_response(request_id: Union[int, str], result: dict[str, Any]) -> dict:
    """Wrap a result in a JSON-RPC response envelope."""
    response = MCPResponse(id=request_id, result=result)
    return response.model_dump(exclude_none=True)


def error_response(
    request_id: Union[int, str],
    code: int,
    message: str,
    data: Optional[Any] = None
) -> dict:
    """Wrap an error in a JSON-RPC response envelope."""
    response = MCPResponse(
        id=request_id,
        error=MCPError(code=code, message=message, data=data)
    )
    return response.model_dump(exclude_none=True)


def to_text(value: Any) -> str:
    """
    Stringify a tool result for a text content block.
    Strings pass through, everything else is pretty-printed JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in value
        ]
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def tool_result(value: Any, is_error: bool = False) -> dict:
    """Build a tools/call result with a single text content block."""
    return {
        "content": [
            {
                "type": "text",
                "text": to_text(value)
            }
        ],
        "isError": is_error
    }


def initialize_result(server_info: ServerInfo) -> dict:
    """Build the initialize result: protocol version, capabilities, server info."""
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {}
        },
        "serverInfo": {
            "name": server_info.name,
            "version": server_info.version,
            "description": server_info.description
        }
    }
