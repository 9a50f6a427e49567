"""
Tool registry and decorator for mcpbridge.
NOTE:
1. MCP uses JSON Schema for tool input definitions. The schema registered with
   a tool is what agents see on tools/list.
2. The pydantic argument model registered alongside it is what the server
   enforces on tools/call, before any upstream I/O happens.
   Both must list the same fields; unknown keys are rejected.
"""
from typing import Any, Callable, Optional

from pydantic import BaseModel

from .schemas import ToolDefinition, ToolSchema


class ToolRegistry:
    """
    Per-service tool storage.
    Filled once at startup by the service's register() function, read-only after.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self):
        return iter(self._tools)

    def add(self, tool_def: ToolDefinition) -> None:
        """Register a tool definition. Names are unique within a registry."""
        if tool_def.name in self._tools:
            raise ValueError(f"Tool '{tool_def.name}' is already registered")
        self._tools[tool_def.name] = tool_def

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool by name."""
        return self._tools.get(name)

    def get_all_tools(self) -> list[ToolDefinition]:
        """Return all registered tools in registration order."""
        return list(self._tools.values())

    def list_tools(self) -> list[dict[str, Any]]:
        """Return the catalog in MCP format (ToolSchema dicts)."""
        return [tool_def.to_schema().model_dump() for tool_def in self._tools.values()]

    def tool(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        arguments: type[BaseModel],
        reports_failure_in_result: bool = False
    ) -> Callable:
        """
        Decorator to register an async handler as an MCP tool.

        Usage:
            @registry.tool(
                name="get_repository",
                description="Get details of a specific repository",
                input_schema={...},
                arguments=GetRepositoryArgs,
            )
            async def get_repository(client: GitHubClient, args: GetRepositoryArgs):
                return await client.get_repository(args.owner, args.repo)

        NOTE: The decorator only records the function in the registry. The
        original function is returned unchanged.
        """
        def decorator(func: Callable) -> Callable:
            self.add(ToolDefinition(
                name=name,
                description=description,
                inputSchema=input_schema,
                arguments=arguments,
                function=func,
                reports_failure_in_result=reports_failure_in_result
            ))
            return func

        return decorator


def object_schema(properties: dict[str, Any], required: Optional[list[str]] = None) -> dict[str, Any]:
    """Build a JSON Schema object descriptor for a tool's inputSchema."""
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False
    }
    if required:
        schema["required"] = required
    return schema


__all__ = ["ToolRegistry", "ToolSchema", "ToolDefinition", "object_schema"]
