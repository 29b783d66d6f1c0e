"""ToolRegistry — decorator-based tool registration with a declarative parameter schema.

Each tool is published on the discovery endpoint and invoked over
``POST /tools/<name>``. Parameters are either declared explicitly or generated
from the handler signature.

Usage:
    from greeting_tools.services.tools.registry import Parameter, ParameterType, registry

    @registry.tool(
        name="greeting",
        description="Greets a person in a random language.",
        parameters=[
            Parameter("name", ParameterType.STRING, "Name of the person to greet", required=True),
        ],
    )
    async def greeting(ctx: ToolContext, name: str) -> dict:
        ...
"""
from __future__ import annotations

import inspect
import logging
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, get_type_hints

from greeting_tools.services.tools.tool_context import ToolContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ToolError(Exception):
    """Base class for registry errors."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name


class ToolRegistrationError(ToolError):
    """A tool could not be registered (e.g. duplicate name)."""


class ToolNotFoundError(ToolError):
    """No tool is registered under the requested name."""


class ToolValidationError(ToolError):
    """Invocation arguments do not satisfy the declared parameters."""


class ToolExecutionError(ToolError):
    """The tool handler raised while running."""


# ---------------------------------------------------------------------------
# Parameter schema
# ---------------------------------------------------------------------------

class ParameterType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


_TYPE_MAP: dict[type, ParameterType] = {
    str: ParameterType.STRING,
    int: ParameterType.INTEGER,
    float: ParameterType.NUMBER,
    bool: ParameterType.BOOLEAN,
    list: ParameterType.ARRAY,
    dict: ParameterType.OBJECT,
}


@dataclass(frozen=True)
class Parameter:
    """One declared input field of a tool."""

    name: str
    type: ParameterType
    description: str = ""
    required: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "required": self.required,
        }

    def accepts(self, value: Any) -> bool:
        """Return True if `value` conforms to this parameter's type."""
        # bool is a subclass of int, so it is rejected for numeric kinds
        if self.type is ParameterType.STRING:
            return isinstance(value, str)
        if self.type is ParameterType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.type is ParameterType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self.type is ParameterType.BOOLEAN:
            return isinstance(value, bool)
        if self.type is ParameterType.ARRAY:
            return isinstance(value, list)
        if self.type is ParameterType.OBJECT:
            return isinstance(value, dict)
        return False


def _python_type_to_parameter_type(tp: Any) -> ParameterType:
    """Convert a Python type hint to a ParameterType."""
    origin = getattr(tp, "__origin__", None)
    args = getattr(tp, "__args__", None) or ()

    # Optional[X] = Union[X, None]
    if origin is typing.Union:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1:
            return _python_type_to_parameter_type(non_none[0])
        # Multi-type union, fall back to string
        return ParameterType.STRING

    if origin is list:
        return ParameterType.ARRAY
    if origin is dict:
        return ParameterType.OBJECT

    # Literal values are strings in every tool we publish
    if origin is typing.Literal:
        return ParameterType.STRING

    return _TYPE_MAP.get(tp, ParameterType.STRING)


def _is_optional(tp: Any) -> bool:
    return (
        getattr(tp, "__origin__", None) is typing.Union
        and type(None) in (getattr(tp, "__args__", None) or ())
    )


def _generate_parameters(func: Callable) -> list[Parameter]:
    """Auto-generate the parameter list from a function signature.

    Skips the parameter typed as ToolContext (injected at runtime, not part of
    the published schema).
    """
    sig = inspect.signature(func)
    hints = get_type_hints(func)
    doc = func.__doc__ or ""

    parameters: list[Parameter] = []
    for name, param in sig.parameters.items():
        if hints.get(name) is ToolContext:
            continue

        # Skip **kwargs, *args
        if param.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue

        tp = hints.get(name, str)

        # Description from docstring "name: ..." lines if available
        description = ""
        for line in doc.split("\n"):
            stripped = line.strip()
            if stripped.startswith(f"{name}:") or stripped.startswith(f"{name} :"):
                description = stripped.split(":", 1)[1].strip()
                break

        required = param.default is inspect.Parameter.empty and not _is_optional(tp)
        parameters.append(
            Parameter(
                name=name,
                type=_python_type_to_parameter_type(tp),
                description=description,
                required=required,
            )
        )
    return parameters


# ---------------------------------------------------------------------------
# ToolDefinition dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool that callers can discover and invoke."""

    name: str
    description: str
    handler: Callable[..., Awaitable[dict]]
    parameters: tuple[Parameter, ...]
    http_method: str = "POST"

    @property
    def endpoint(self) -> str:
        return f"/tools/{self.name}"

    def to_discovery(self) -> dict:
        """Discovery document entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
            "endpoint": self.endpoint,
            "http_method": self.http_method,
        }


# ---------------------------------------------------------------------------
# ToolRegistry — singleton that collects all tools
# ---------------------------------------------------------------------------

class ToolRegistry:
    """Collect and manage tool definitions. Singleton instance at module level."""

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}

    # -- Registration --

    def register(
        self,
        name: str,
        description: str,
        handler: Callable[..., Awaitable[dict]],
        parameters: Optional[list[Parameter]] = None,
    ) -> ToolDefinition:
        """Bind a descriptor to a handler. Raises on a duplicate name."""
        if name in self._tools:
            raise ToolRegistrationError(f"Tool '{name}' is already registered", name)

        params = parameters if parameters is not None else _generate_parameters(handler)
        seen: set[str] = set()
        for param in params:
            if param.name in seen:
                raise ToolRegistrationError(
                    f"Tool '{name}' declares parameter '{param.name}' twice", name,
                )
            seen.add(param.name)

        defn = ToolDefinition(
            name=name,
            description=description,
            handler=handler,
            parameters=tuple(params),
        )
        self._tools[name] = defn
        logger.info(f"Registered tool: {name} ({len(defn.parameters)} parameter(s))")
        return defn

    def tool(
        self,
        name: str,
        description: str,
        parameters: Optional[list[Parameter]] = None,
    ) -> Callable:
        """Register an async function as an invocable tool.

        Example:
            @registry.tool(
                name="todays-date",
                description="Returns today's date in the specified format",
                parameters=[Parameter("format", ParameterType.STRING, "Date format")],
            )
            async def todays_date(ctx: ToolContext, format: str = "%Y-%m-%d") -> dict: ...
        """

        def decorator(func: Callable[..., Awaitable[dict]]) -> Callable:
            self.register(name, description, func, parameters)
            return func

        return decorator

    # -- Lookups --

    def get_tool(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def get_all_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def to_discovery(self) -> dict:
        """Return the discovery document, in registration order."""
        return {"functions": [t.to_discovery() for t in self._tools.values()]}

    # -- Validation --

    @staticmethod
    def validate_arguments(tool_def: ToolDefinition, arguments: Any) -> dict:
        """Check raw arguments against the declared parameters.

        Returns the keyword arguments for the handler. Optional parameters
        that are missing or null are left out so the handler default applies.
        """
        if not isinstance(arguments, Mapping):
            raise ToolValidationError(
                f"Parameters for '{tool_def.name}' must be a JSON object", tool_def.name,
            )

        validated: dict[str, Any] = {}
        for param in tool_def.parameters:
            value = arguments.get(param.name)
            if value is None:
                if param.required:
                    raise ToolValidationError(
                        f"Missing required parameter '{param.name}'", tool_def.name,
                    )
                continue
            if not param.accepts(value):
                raise ToolValidationError(
                    f"Parameter '{param.name}' must be of type {param.type.value}, "
                    f"got {type(value).__name__}",
                    tool_def.name,
                )
            validated[param.name] = value

        declared = {p.name for p in tool_def.parameters}
        extra = [k for k in arguments if k not in declared]
        if extra:
            logger.debug(f"Ignoring undeclared parameters for '{tool_def.name}': {extra}")
        return validated

    # -- Tool execution --

    async def execute_tool(
        self,
        name: str,
        ctx: ToolContext,
        arguments: Any,
    ) -> dict:
        """Execute a tool by name with the given arguments.

        Returns the handler's result. Raises ToolNotFoundError,
        ToolValidationError or ToolExecutionError.
        """
        tool_def = self.get_tool(name)
        if not tool_def:
            raise ToolNotFoundError(f"Unknown tool '{name}'", name)

        kwargs = self.validate_arguments(tool_def, arguments)

        try:
            return await tool_def.handler(ctx, **kwargs)
        except Exception as e:
            logger.exception(f"Tool '{name}' execution failed")
            raise ToolExecutionError(f"Error executing '{name}': {e}", name) from e

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __repr__(self) -> str:
        tools = ", ".join(self._tools.keys())
        return f"<ToolRegistry tools=[{tools}]>"


# Singleton registry instance, import this everywhere
registry = ToolRegistry()
