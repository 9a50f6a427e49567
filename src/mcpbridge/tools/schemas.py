"""
Tool schema definitions for mcpbridge.

ToolSchema: JSON-serializable format for MCP responses.
ToolDefinition: Internal storage that includes the argument model and handler.
"""

from typing import Any, Awaitable, Callable
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..mcp.errors import InvalidArgumentsError


class ToolSchema(BaseModel):
    """
    MCP-compliant tool format.
    Sent to agents via tools/list response.
    """
    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    inputSchema: dict[str, Any] = Field(..., description="JSON Schema for parameters")


class ToolArguments(BaseModel):
    """Base for tool argument models. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")


class ActionResult(BaseModel):
    """Outcome of a tool that reports failure in its result body."""
    success: bool
    message: str


class ToolDefinition:
    """
    Internal tool storage.
    Includes the argument model and the async handler to execute.

    The handler is called as ``await function(client, arguments)`` where
    ``client`` is the per-request upstream client.
    """
    def __init__(
        self,
        name: str,
        description: str,
        inputSchema: dict[str, Any],
        arguments: type[BaseModel],
        function: Callable[[Any, Any], Awaitable[Any]],
        reports_failure_in_result: bool = False
    ):
        self.name = name
        self.description = description
        self.inputSchema = inputSchema
        self.arguments = arguments
        self.function = function
        self.reports_failure_in_result = reports_failure_in_result

    def to_schema(self) -> ToolSchema:
        """Convert to MCP-compliant format (drops handler and model)."""
        return ToolSchema(
            name=self.name,
            description=self.description,
            inputSchema=self.inputSchema
        )

    def parse_arguments(self, raw: dict[str, Any]) -> BaseModel:
        """Validate raw tools/call arguments into the tool's argument model."""
        try:
            return self.arguments.model_validate(raw)
        except ValidationError as e:
            errors = [
                {
                    "loc": ".".join(str(part) for part in err["loc"]),
                    "msg": err["msg"],
                    "type": err["type"]
                }
                for err in e.errors()
            ]
            raise InvalidArgumentsError(self.name, errors) from e
