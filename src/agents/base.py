"""
Agent Base
==========

Shared plumbing for the educational agents.

Every agent:
1. Declares its tool schemas in `tools` ({name, description, inputSchema})
2. Maps each tool name to a builder method in `_handlers()`
3. Dispatches through `handle_tool_call(name, args)`

Dispatch Flow:
    handle_tool_call("create_lightning_curriculum", {...})
         │
         ▼
    Look up builder by name ── unknown ──▶ log + ValueError("Unknown tool: ...")
         │
         ▼
    Run builder (sync or async) with the args dict
         │
         ▼
    Nested dict response

Randomness and time are injected (`random.Random` and a clock returning an
aware datetime) so tests can pin generated ids, shuffles and timestamps.
"""

import inspect
import random
from datetime import datetime, timezone
from typing import Any, Callable

from src.utils.logger import Logger

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class BaseAgent:
    """
    Base class for tool-dispatching agents.

    Subclasses set `name` and `tools`, and implement `_handlers()`.

    Example:
        agent = LightningEducator(rng=random.Random(7))
        schemas = agent.get_tools()
        result = await agent.handle_tool_call(
            "create_lightning_curriculum",
            {"learner_profile": {...}, "curriculum_focus": ["channels"]}
        )
    """

    name = "BaseAgent"
    tools: list[dict] = []

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Clock | None = None
    ):
        """
        Args:
            rng: Random source for shuffles and draws
            clock: Callable returning the current aware datetime
        """
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.logger = Logger(self.name)

    def get_tools(self) -> list[dict]:
        """Tool schemas this agent serves."""
        return self.tools

    def tool_names(self) -> list[str]:
        return [tool["name"] for tool in self.tools]

    def _handlers(self) -> dict[str, Callable[[dict], Any]]:
        """Tool name to builder mapping."""
        raise NotImplementedError

    async def handle_tool_call(self, name: str, args: dict | None = None) -> dict:
        """
        Run the builder registered for a tool name.

        Args:
            name: Tool name
            args: Tool arguments

        Returns:
            The builder's response

        Raises:
            ValueError: If no builder is registered for `name`
        """
        try:
            handler = self._handlers().get(name)
            if handler is None:
                raise ValueError(f"Unknown tool: {name}")

            result = handler(args or {})
            if inspect.isawaitable(result):
                result = await result
            return result

        except Exception as e:
            self.logger.error(f"Tool call failed: {name}", e)
            raise

    # ==========================================================================
    # Helpers for builders
    # ==========================================================================

    def now_iso(self) -> str:
        return self.clock().isoformat()

    def now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def make_id(self, prefix: str) -> str:
        """Timestamp-based id, e.g. `curriculum_1718000000000`."""
        return f"{prefix}_{self.now_ms()}"
