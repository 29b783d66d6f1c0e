"""Tool system — decorator-based tool registration behind the discovery endpoint.

Usage:
    from greeting_tools.services.tools import registry, ToolContext

    @registry.tool(name="my-tool", description="Does something")
    async def my_tool(ctx: ToolContext, arg: str) -> dict:
        return {"result": arg}
"""
from greeting_tools.services.tools.registry import (
    Parameter,
    ParameterType,
    ToolDefinition,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    ToolValidationError,
    registry,
)
from greeting_tools.services.tools.tool_context import ToolContext

__all__ = [
    "registry",
    "ToolRegistry",
    "ToolDefinition",
    "ToolContext",
    "Parameter",
    "ParameterType",
    "ToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
]
