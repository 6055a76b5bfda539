"""
Tests for the tool registry and executor
========================================
"""

import pytest

from src.agents import AGENT_CLASSES, register_agent_tools
from src.agents.executor import ToolExecutor
from src.agents.lightning_educator import LightningEducator
from src.tools import MCPTool, ToolRegistry, ToolResult, register_all_tools


async def _echo(params: dict) -> ToolResult:
    return ToolResult(success=True, data=params)


async def _explode(params: dict) -> ToolResult:
    raise RuntimeError("kaboom")


def _registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(MCPTool("echo", "Echo arguments", {"type": "object"}, _echo))
    registry.register(MCPTool("explode", "Always fails", {"type": "object"}, _explode))
    return registry


class TestToolRegistry:
    """Registration and execution."""

    def test_duplicate_name_rejected(self) -> None:
        registry = _registry()

        with pytest.raises(ValueError, match="already registered"):
            registry.register(MCPTool("echo", "again", {}, _echo))

    @pytest.mark.asyncio
    async def test_missing_tool_is_error_result(self) -> None:
        result = await _registry().execute("nope", {})

        assert result.success is False
        assert result.error == "Tool 'nope' not found"

    @pytest.mark.asyncio
    async def test_exception_becomes_error_result(self) -> None:
        result = await _registry().execute("explode", {})

        assert result.success is False
        assert result.error == "kaboom"

    def test_schema_uses_input_schema_key(self) -> None:
        schema = _registry().get("echo").to_mcp_schema()

        assert schema == {"name": "echo", "description": "Echo arguments", "inputSchema": {"type": "object"}}

    def test_all_tools_registered_without_collisions(self) -> None:
        registry = register_all_tools()
        names = registry.list_names()

        assert len(names) == len(set(names))
        for expected in ("get_bitcoin_price", "get_fee_estimates", "fetch_bitcoin_news",
                         "canva_search_designs", "create_lightning_curriculum",
                         "track_releases", "generate_bulk_create_csv"):
            assert expected in names

    def test_every_agent_tool_is_served(self) -> None:
        registry = register_all_tools()

        for cls in AGENT_CLASSES:
            for schema in cls.tools:
                assert registry.get(schema["name"]) is not None


class TestAgentTools:
    """Agent tools through the registry."""

    @pytest.mark.asyncio
    async def test_agent_tool_wraps_response(self) -> None:
        registry = ToolRegistry()
        register_agent_tools(registry, [LightningEducator()])

        result = await registry.execute("create_lightning_curriculum", {})

        assert result.success is True
        assert result.data["success"] is True

    @pytest.mark.parametrize("agent_class", AGENT_CLASSES, ids=lambda cls: cls.__name__)
    @pytest.mark.asyncio
    async def test_unknown_agent_tool_raises(self, agent_class) -> None:
        with pytest.raises(ValueError, match=r"Unknown tool: fly"):
            await agent_class().handle_tool_call("fly", {})


class TestToolExecutor:
    """Batch parsing and execution."""

    def test_parse_json_string_arguments(self) -> None:
        calls = ToolExecutor(_registry()).parse_tool_calls([
            {"id": "a", "name": "echo", "arguments": '{"x": 1}'},
            {"name": "echo", "arguments": "{not json"},
        ])

        assert calls[0].arguments == {"x": 1}
        assert calls[1].arguments == {}
        assert calls[1].id == "call_2"

    @pytest.mark.asyncio
    async def test_parallel_results_keep_order(self) -> None:
        executor = ToolExecutor(_registry())
        calls = executor.parse_tool_calls([
            {"id": "1", "name": "echo", "arguments": {"n": 1}},
            {"id": "2", "name": "explode", "arguments": {}},
            {"id": "3", "name": "missing", "arguments": {}},
        ])

        results = await executor.execute_parallel(calls)
        blocks = executor.format_results(results)

        assert [r.tool_call_id for r in results] == ["1", "2", "3"]
        assert blocks[0] == {"type": "tool_result", "tool_use_id": "1", "content": '{"n": 1}', "is_error": False}
        assert blocks[1]["content"] == "Error: kaboom"
        assert blocks[2]["is_error"] is True

    def test_has_tool(self) -> None:
        executor = ToolExecutor(_registry())

        assert executor.has_tool("echo")
        assert not executor.has_tool("missing")
        assert executor.get_available_tools() == ["echo", "explode"]
