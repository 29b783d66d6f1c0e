"""Tests for ToolRegistry — registration, discovery, validation and dispatch."""
from typing import Optional

import pytest

from greeting_tools.services.tools import (
    Parameter,
    ParameterType,
    ToolContext,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    ToolValidationError,
)


async def lookup(ctx: ToolContext, query: str, limit: int = 5, tags: Optional[list[str]] = None) -> dict:
    """Look something up.

    Args:
        query: Text to search for.
        limit: Maximum number of hits.
    """
    return {"query": query, "limit": limit, "tags": tags}


async def echo(ctx: ToolContext, **kwargs) -> dict:
    return kwargs


async def explode(ctx: ToolContext) -> dict:
    raise RuntimeError("boom")


ECHO_PARAMS = [
    Parameter("text", ParameterType.STRING, "Text to echo", required=True),
    Parameter("count", ParameterType.INTEGER, "Repeat count"),
    Parameter("ratio", ParameterType.NUMBER, "A ratio"),
    Parameter("loud", ParameterType.BOOLEAN, "Shout it"),
    Parameter("items", ParameterType.ARRAY, "Things"),
    Parameter("meta", ParameterType.OBJECT, "Extra data"),
]


@pytest.fixture
def tools():
    reg = ToolRegistry()
    reg.register("echo", "Echo the parameters back", echo, ECHO_PARAMS)
    return reg


# =========================================================================
# A. Registration
# =========================================================================


class TestRegistration:
    def test_decorator_registers_and_returns_function(self):
        reg = ToolRegistry()

        @reg.tool(name="lookup", description="Look it up")
        async def handler(ctx: ToolContext, query: str) -> dict:
            return {}

        assert "lookup" in reg
        assert len(reg) == 1
        assert reg.get_tool("lookup").handler is handler

    def test_duplicate_name_rejected(self, tools):
        with pytest.raises(ToolRegistrationError, match="already registered"):
            tools.register("echo", "Another echo", echo, [])
        assert len(tools) == 1

    def test_duplicate_parameter_rejected(self):
        reg = ToolRegistry()
        params = [
            Parameter("a", ParameterType.STRING),
            Parameter("a", ParameterType.INTEGER),
        ]
        with pytest.raises(ToolRegistrationError, match="twice"):
            reg.register("dup", "Duplicate params", echo, params)
        assert "dup" not in reg

    def test_parameters_generated_from_signature(self):
        reg = ToolRegistry()
        defn = reg.register("lookup", "Look it up", lookup)

        assert [p.name for p in defn.parameters] == ["query", "limit", "tags"]
        query, limit, tags = defn.parameters
        assert query == Parameter("query", ParameterType.STRING, "Text to search for.", True)
        assert limit == Parameter("limit", ParameterType.INTEGER, "Maximum number of hits.", False)
        assert tags.type is ParameterType.ARRAY
        assert tags.required is False

    def test_explicit_parameters_keep_declared_order(self, tools):
        names = [p.name for p in tools.get_tool("echo").parameters]
        assert names == ["text", "count", "ratio", "loud", "items", "meta"]


# =========================================================================
# B. Discovery
# =========================================================================


class TestDiscovery:
    def test_discovery_document_shape(self, tools):
        doc = tools.to_discovery()
        assert len(doc["functions"]) == 1
        fn = doc["functions"][0]
        assert fn["name"] == "echo"
        assert fn["description"] == "Echo the parameters back"
        assert fn["endpoint"] == "/tools/echo"
        assert fn["http_method"] == "POST"
        assert fn["parameters"][0] == {
            "name": "text",
            "type": "string",
            "description": "Text to echo",
            "required": True,
        }

    def test_discovery_in_registration_order(self):
        reg = ToolRegistry()
        for name in ("zeta", "alpha", "mid"):
            reg.register(name, name, echo, [])
        assert [f["name"] for f in reg.to_discovery()["functions"]] == ["zeta", "alpha", "mid"]


# =========================================================================
# C. Validation
# =========================================================================


class TestValidation:
    def test_valid_arguments_pass_through(self, tools):
        args = {
            "text": "hi",
            "count": 2,
            "ratio": 0.5,
            "loud": True,
            "items": [1, 2],
            "meta": {"k": "v"},
        }
        assert ToolRegistry.validate_arguments(tools.get_tool("echo"), args) == args

    def test_missing_required_rejected(self, tools):
        with pytest.raises(ToolValidationError, match="Missing required parameter 'text'"):
            ToolRegistry.validate_arguments(tools.get_tool("echo"), {"count": 1})

    def test_null_required_rejected(self, tools):
        with pytest.raises(ToolValidationError, match="'text'"):
            ToolRegistry.validate_arguments(tools.get_tool("echo"), {"text": None})

    def test_optional_null_omitted(self, tools):
        validated = ToolRegistry.validate_arguments(
            tools.get_tool("echo"), {"text": "hi", "count": None},
        )
        assert validated == {"text": "hi"}

    def test_undeclared_keys_dropped(self, tools):
        validated = ToolRegistry.validate_arguments(
            tools.get_tool("echo"), {"text": "hi", "colour": "blue"},
        )
        assert validated == {"text": "hi"}

    @pytest.mark.parametrize(
        "field, value",
        [
            ("text", 5),
            ("count", "2"),
            ("count", 1.5),
            ("count", True),
            ("ratio", False),
            ("ratio", "0.5"),
            ("loud", "yes"),
            ("loud", 1),
            ("items", "a,b"),
            ("meta", []),
        ],
    )
    def test_type_mismatch_rejected(self, tools, field, value):
        args = {"text": "hi", field: value}
        with pytest.raises(ToolValidationError, match=f"'{field}' must be of type"):
            ToolRegistry.validate_arguments(tools.get_tool("echo"), args)

    def test_integer_accepted_as_number(self, tools):
        validated = ToolRegistry.validate_arguments(
            tools.get_tool("echo"), {"text": "hi", "ratio": 3},
        )
        assert validated["ratio"] == 3

    def test_non_mapping_rejected(self, tools):
        with pytest.raises(ToolValidationError, match="JSON object"):
            ToolRegistry.validate_arguments(tools.get_tool("echo"), ["hi"])


# =========================================================================
# D. Execution
# =========================================================================


class TestExecution:
    async def test_execute_passes_validated_kwargs(self, tools, tool_context):
        result = await tools.execute_tool("echo", tool_context, {"text": "hi", "extra": 1})
        assert result == {"text": "hi"}

    async def test_handler_defaults_apply(self, tool_context):
        reg = ToolRegistry()
        reg.register("lookup", "Look it up", lookup)
        result = await reg.execute_tool("lookup", tool_context, {"query": "maui"})
        assert result == {"query": "maui", "limit": 5, "tags": None}

    async def test_unknown_tool(self, tools, tool_context):
        with pytest.raises(ToolNotFoundError, match="Unknown tool 'nope'"):
            await tools.execute_tool("nope", tool_context, {})

    async def test_validation_runs_before_handler(self, tool_context):
        calls = []

        async def record(ctx: ToolContext, name: str) -> dict:
            calls.append(name)
            return {}

        reg = ToolRegistry()
        reg.register("record", "Record", record)
        with pytest.raises(ToolValidationError):
            await reg.execute_tool("record", tool_context, {})
        assert calls == []

    async def test_handler_failure_wrapped(self, tool_context):
        reg = ToolRegistry()
        reg.register("explode", "Always fails", explode, [])
        with pytest.raises(ToolExecutionError, match="Error executing 'explode': boom") as exc_info:
            await reg.execute_tool("explode", tool_context, {})
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.tool_name == "explode"
