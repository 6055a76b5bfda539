"""
Educational Agents
==================

Each agent owns a set of MCP-style tools and answers them from its own
tables, live market data or the GitHub API.

This module provides:
- AGENT_CLASSES: every agent served by the registry
- register_agent_tools: expose each agent tool as an MCPTool
"""

from src.agents.accessibility_optimizer import AccessibilityOptimizer
from src.agents.assessment_generator import AssessmentGenerator
from src.agents.base import BaseAgent
from src.agents.canva_auto_designer import CanvaAutoDesigner
from src.agents.custody_security_mentor import CustodySecurityMentor
from src.agents.dev_radar import DevRadar
from src.agents.history_timeline_builder import HistoryTimelineBuilder
from src.agents.lightning_educator import LightningEducator
from src.agents.peer_learning_facilitator import PeerLearningFacilitator
from src.agents.platform_strategy_mentor import PlatformStrategyMentor
from src.agents.socratic_tutor import SocraticTutor
from src.tools import MCPTool, ToolRegistry, ToolResult
from src.utils.logger import Logger

logger = Logger("Agents")

AGENT_CLASSES: list[type[BaseAgent]] = [
    SocraticTutor,
    AssessmentGenerator,
    CustodySecurityMentor,
    PlatformStrategyMentor,
    AccessibilityOptimizer,
    PeerLearningFacilitator,
    HistoryTimelineBuilder,
    LightningEducator,
    DevRadar,
    CanvaAutoDesigner,
]


def _agent_tool(agent: BaseAgent, schema: dict) -> MCPTool:
    tool_name = schema["name"]

    async def execute(params: dict) -> ToolResult:
        return ToolResult(success=True, data=await agent.handle_tool_call(tool_name, params))

    return MCPTool(
        name=tool_name,
        description=schema["description"],
        parameters=schema["inputSchema"],
        execute=execute
    )


def register_agent_tools(registry: ToolRegistry, agents: list[BaseAgent] | None = None) -> None:
    """
    Register every tool of every agent.

    Args:
        registry: Registry to populate
        agents: Agent instances to serve (defaults to one of each class)

    Raises:
        ValueError: If two tools share a name
    """
    agents = agents if agents is not None else [cls() for cls in AGENT_CLASSES]

    for agent in agents:
        for schema in agent.get_tools():
            registry.register(_agent_tool(agent, schema))
        logger.debug(f"Registered {len(agent.tools)} tools for {agent.name}")


__all__ = [
    "AGENT_CLASSES",
    "AccessibilityOptimizer",
    "AssessmentGenerator",
    "BaseAgent",
    "CanvaAutoDesigner",
    "CustodySecurityMentor",
    "DevRadar",
    "HistoryTimelineBuilder",
    "LightningEducator",
    "PeerLearningFacilitator",
    "PlatformStrategyMentor",
    "SocraticTutor",
    "register_agent_tools",
]
