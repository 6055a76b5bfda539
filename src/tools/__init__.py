"""
MCP Tools System
================

Tools follow the Model Context Protocol (MCP) shape: each tool has a name,
a description shown to the host model, and a JSON Schema for its input.

Two families of tools are registered here:

1. Market data tools: Bitcoin price, mempool fee estimates, RSS news,
   Canva designs (thin async wrappers around HTTP APIs)
2. Agent tools: every tool declared by an educational agent
   (AssessmentGenerator, CustodySecurityMentor, LightningEducator, ...)

How a call flows:
1. The host runtime (or the CLI) asks the registry for a tool by name
2. The registry runs the tool with the provided arguments
3. Whatever happens, a ToolResult comes back; exceptions are logged and
   turned into ToolResult(success=False, error=...)

This module provides:
- MCPTool dataclass for defining tools
- ToolResult for standardized responses
- ToolRegistry for managing available tools
"""

from dataclasses import dataclass
from typing import Any, Callable, Awaitable
import json

from src.utils.logger import Logger

logger = Logger("Tools")


@dataclass
class ToolResult:
    """
    Standardized result from tool execution.

    Attributes:
        success: Whether the tool executed successfully
        data: The result data (varies by tool)
        error: Error message if success is False
    """
    success: bool
    data: Any = None
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error
        }

    def to_message(self) -> str:
        """Format as a text payload for the host model."""
        if self.success:
            return json.dumps(self.data, default=str)
        else:
            return f"Error: {self.error}"


@dataclass
class MCPTool:
    """
    Definition of a tool following MCP pattern.

    Attributes:
        name: Unique identifier for the tool
        description: What the tool does (shown to the host model)
        parameters: JSON Schema for the input
        execute: Async function that runs the tool

    Example:
        async def fetch_price(params: dict) -> ToolResult:
            price = await get_bitcoin_price(params.get("currency", "usd"))
            return ToolResult(success=True, data={"price": price})

        tool = MCPTool(
            name="get_bitcoin_price",
            description="Current Bitcoin spot price",
            parameters={
                "type": "object",
                "properties": {"currency": {"type": "string"}},
                "required": []
            },
            execute=fetch_price
        )
    """
    name: str
    description: str
    parameters: dict
    execute: Callable[[dict], Awaitable[ToolResult]]

    def to_mcp_schema(self) -> dict:
        """
        Convert to the MCP tool descriptor format.

        Returns:
            Dict with name, description and inputSchema
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters
        }


class ToolRegistry:
    """
    Central registry for all available tools.

    Example:
        registry = ToolRegistry()
        registry.register(my_tool)

        tool = registry.get("my_tool")
        schemas = registry.get_schemas()
        result = await registry.execute("my_tool", {"x": 1})
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._tools: dict[str, MCPTool] = {}

    def register(self, tool: MCPTool) -> None:
        """
        Register a tool.

        Args:
            tool: The tool to register

        Raises:
            ValueError: If a tool with this name already exists
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get(self, name: str) -> MCPTool | None:
        """
        Get a tool by name.

        Args:
            name: The tool name

        Returns:
            The tool, or None if not found
        """
        return self._tools.get(name)

    def get_all(self) -> list[MCPTool]:
        """Get all registered tools."""
        return list(self._tools.values())

    def get_schemas(self) -> list[dict]:
        """Get all tools as MCP descriptors."""
        return [tool.to_mcp_schema() for tool in self._tools.values()]

    def list_names(self) -> list[str]:
        """Get list of all tool names."""
        return list(self._tools.keys())

    async def execute(self, name: str, params: dict) -> ToolResult:
        """
        Execute a tool by name.

        Args:
            name: The tool name
            params: Parameters to pass to the tool

        Returns:
            ToolResult from the tool execution
        """
        tool = self.get(name)
        if not tool:
            return ToolResult(success=False, error=f"Tool '{name}' not found")

        try:
            logger.info(f"Executing tool: {name}")
            return await tool.execute(params)
        except Exception as e:
            logger.error(f"Tool execution failed: {name}", e)
            return ToolResult(success=False, error=str(e))


# Global tool registry instance
tool_registry = ToolRegistry()

_registered = False


def register_all_tools() -> ToolRegistry:
    """
    Register market data tools and every agent's tools.

    Safe to call more than once. Kept out of module import to avoid
    circular imports between src.tools and src.agents.

    Returns:
        The populated global registry
    """
    global _registered
    if _registered:
        return tool_registry

    from src.tools.btc_price import register_price_tools
    from src.tools.fee_estimates import register_fee_tools
    from src.tools.rss_news import register_news_tools
    from src.tools.canva_api import register_canva_tools
    from src.agents import register_agent_tools

    register_price_tools(tool_registry)
    register_fee_tools(tool_registry)
    register_news_tools(tool_registry)
    register_canva_tools(tool_registry)
    register_agent_tools(tool_registry)

    _registered = True
    logger.info(f"Registered {len(tool_registry.list_names())} tools")
    return tool_registry


__all__ = [
    "MCPTool",
    "ToolResult",
    "ToolRegistry",
    "tool_registry",
    "register_all_tools",
]
