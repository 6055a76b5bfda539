"""
Tool Executor
=============

Runs batches of tool calls from a host runtime through the registry.

The executor:
1. Parses tool call requests ({id, name, arguments}) where arguments may be
   a dict or a JSON string
2. Executes each call through the ToolRegistry
3. Formats results as MCP tool result content

Every call yields a ToolCallResult; failures arrive as
ToolResult(success=False, ...) rather than exceptions, so one bad call never
sinks the batch.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any

from src.tools import ToolRegistry, ToolResult, register_all_tools
from src.utils.logger import Logger

logger = Logger("ToolExecutor")


@dataclass
class ToolCall:
    """
    A requested tool call.

    Attributes:
        id: The tool call ID (for matching results)
        name: The tool name
        arguments: Parsed arguments dict
    """
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolCallResult:
    """
    Result of executing a tool call.

    Attributes:
        tool_call_id: The original tool call ID
        name: The tool name
        result: The tool result
    """
    tool_call_id: str
    name: str
    result: ToolResult

    def to_mcp_content(self) -> dict:
        """Format as an MCP tool result block."""
        return {
            "type": "tool_result",
            "tool_use_id": self.tool_call_id,
            "content": self.result.to_message(),
            "is_error": not self.result.success
        }


class ToolExecutor:
    """
    Executes tool calls against the registry.

    Example:
        executor = ToolExecutor()

        calls = executor.parse_tool_calls([
            {"id": "1", "name": "get_bitcoin_price", "arguments": {}},
            {"id": "2", "name": "get_fee_estimates", "arguments": "{}"},
        ])
        results = await executor.execute_parallel(calls)
    """

    def __init__(self, registry: ToolRegistry | None = None):
        """
        Args:
            registry: Registry to execute against (defaults to the populated global one)
        """
        self.registry = registry or register_all_tools()

    def parse_tool_calls(self, requests: list[dict]) -> list[ToolCall]:
        """
        Parse raw tool call requests.

        Arguments that fail to parse as JSON become an empty dict; the tool
        itself then reports what is missing.

        Args:
            requests: Dicts with id, name and arguments

        Returns:
            List of parsed ToolCall objects
        """
        tool_calls = []

        for index, request in enumerate(requests):
            arguments = request.get("arguments") or {}

            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments)
                except json.JSONDecodeError as e:
                    logger.error(f"Failed to parse tool arguments: {e}")
                    arguments = {}

            tool_calls.append(ToolCall(
                id=str(request.get("id") or f"call_{index + 1}"),
                name=request.get("name", ""),
                arguments=arguments
            ))

        logger.debug(f"Parsed {len(tool_calls)} tool calls")
        return tool_calls

    async def execute_one(self, tool_call: ToolCall) -> ToolCallResult:
        """
        Execute a single tool call.

        Args:
            tool_call: The tool call to execute

        Returns:
            ToolCallResult with the execution result
        """
        result = await self.registry.execute(tool_call.name, tool_call.arguments)

        if result.success:
            logger.debug(f"Tool {tool_call.name} succeeded")
        else:
            logger.warning(f"Tool {tool_call.name} failed: {result.error}")

        return ToolCallResult(
            tool_call_id=tool_call.id,
            name=tool_call.name,
            result=result
        )

    async def execute_all(self, tool_calls: list[ToolCall]) -> list[ToolCallResult]:
        """
        Execute tool calls one after another, in order.

        For independent calls, use execute_parallel().
        """
        results = []

        for tool_call in tool_calls:
            results.append(await self.execute_one(tool_call))

        return results

    async def execute_parallel(self, tool_calls: list[ToolCall]) -> list[ToolCallResult]:
        """
        Execute tool calls concurrently.

        Results are returned in the same order as inputs.
        """
        results = await asyncio.gather(*(self.execute_one(tc) for tc in tool_calls))
        return list(results)

    def format_results(self, results: list[ToolCallResult]) -> list[dict]:
        """MCP tool result blocks for a batch."""
        return [result.to_mcp_content() for result in results]

    def get_available_tools(self) -> list[str]:
        """Get list of available tool names."""
        return self.registry.list_names()

    def has_tool(self, name: str) -> bool:
        """Check if a tool is available."""
        return self.registry.get(name) is not None
