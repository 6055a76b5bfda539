"""
Mempool Fee Estimate Tools
==========================

Fee estimates, mempool statistics and recent blocks from mempool.space.

These feed the scenario and calculation questions of the assessment
generator, the Canva designer's congestion banner and the fee tools exposed
to the host runtime.

Caching policy (fresh / kept as fallback):
- Recommended fees: 30s / 60s
- Mempool stats: 10s / 30s
- Recent blocks: 60s / 300s

API Notes:
- GET /v1/fees/recommended -> fastestFee, halfHourFee, hourFee,
  economyFee, minimumFee (sat/vB)
- GET /mempool -> count, vsize, total_fee, fee_histogram
- GET /v1/blocks -> the 10 (or 15) most recent blocks
"""

import math
import time
from typing import Any, Callable

import httpx

from src.tools import MCPTool, ToolRegistry, ToolResult
from src.tools.http import request_json
from src.utils.cache import TTLCache, cache_store
from src.utils.config import get_config
from src.utils.logger import Logger

logger = Logger("FeeEstimates")

FEE_FIELDS = ("fastestFee", "halfHourFee", "hourFee", "economyFee", "minimumFee")

# Exact confirmation targets mempool.space publishes a rate for
_TARGET_FIELDS = {
    1: "fastestFee",
    3: "halfHourFee",
    6: "hourFee",
    144: "economyFee",
}

_URGENCY = {
    "high": ("fastestFee", 1),
    "medium": ("halfHourFee", 3),
    "low": ("economyFee", 144),
}

_CONGESTION_BANDS = [
    (1000, "low", "Mempool is relatively empty, low fees should work well"),
    (5000, "medium", "Moderate congestion, standard fees recommended"),
    (15000, "high", "High congestion, higher fees recommended for faster confirmation"),
]


class FeeDataUnavailableError(RuntimeError):
    """Raised when neither mempool.space nor the cache can answer."""


class MempoolFeeTool:
    """
    mempool.space client with cache fallback.

    Example:
        tool = MempoolFeeTool()
        fees = await tool.get_fee_estimates()
        quote = await tool.calculate_optimal_fee(250, target_blocks=3)
    """

    def __init__(
        self,
        cache: TTLCache | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        now_ms: Callable[[], int] | None = None
    ):
        self.cache = cache if cache is not None else cache_store
        self.client = client
        self._base_url = base_url
        self._now_ms = now_ms or (lambda: int(time.time() * 1000))

    @property
    def base_url(self) -> str:
        return (self._base_url or get_config().mempool.api_url).rstrip("/")

    async def _cached_fetch(
        self,
        cache_key: str,
        endpoint: str,
        fresh_seconds: float,
        ttl_seconds: float,
        transform: Callable[[Any], Any],
        what: str
    ) -> Any:
        """
        Serve fresh cache, else fetch, else fall back to stale cache.

        Raises:
            FeeDataUnavailableError: If the fetch fails with nothing cached
        """
        fresh = self.cache.get(cache_key, max_age_seconds=fresh_seconds)
        if fresh is not None:
            return fresh

        try:
            payload = await request_json("GET", f"{self.base_url}{endpoint}", client=self.client)
            value = transform(payload)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to fetch {what}", e)
            stale = self.cache.get(cache_key)
            if stale is not None:
                logger.warning(f"Using cached {what} due to API failure")
                return stale
            raise FeeDataUnavailableError(f"Unable to fetch {what}") from e

        self.cache.set(cache_key, value, ttl_seconds)
        return value

    async def get_fee_estimates(self) -> dict:
        """
        Get recommended fee rates in sat/vB.

        Returns:
            Dict with fastestFee, halfHourFee, hourFee, economyFee,
            minimumFee and timestamp (ms)
        """
        def transform(payload: dict) -> dict:
            estimates = {field: payload[field] for field in FEE_FIELDS}
            estimates["timestamp"] = self._now_ms()
            return estimates

        return await self._cached_fetch(
            "mempool_fee_estimates", "/v1/fees/recommended", 30, 60, transform, "fee estimates"
        )

    async def get_mempool_stats(self) -> dict:
        """Get mempool transaction count, vsize, total fee and histogram."""
        def transform(payload: dict) -> dict:
            return {
                "count": payload["count"],
                "vsize": payload["vsize"],
                "total_fee": payload["total_fee"],
                "fee_histogram": payload.get("fee_histogram", []),
                "timestamp": self._now_ms(),
            }

        return await self._cached_fetch(
            "mempool_stats", "/mempool", 10, 30, transform, "mempool statistics"
        )

    async def get_recent_blocks(self, limit: int = 10) -> list[dict]:
        """
        Get the most recent blocks with their fee data.

        Args:
            limit: Number of blocks to return (mempool.space sends up to 15)
        """
        def transform(payload: list) -> list[dict]:
            blocks = []
            for block in payload[:limit]:
                extras = block.get("extras", {})
                blocks.append({
                    "height": block["height"],
                    "timestamp": block.get("timestamp"),
                    "tx_count": block.get("tx_count"),
                    "weight": block.get("weight"),
                    "total_fees": extras.get("totalFees"),
                    "median_fee": extras.get("medianFee"),
                    "fee_range": extras.get("feeRange", []),
                })
            return blocks

        return await self._cached_fetch(
            f"recent_blocks_{limit}", "/v1/blocks", 60, 300, transform, "recent blocks"
        )

    async def get_fee_for_confirmation(self, target_blocks: int) -> float:
        """
        Fee rate for confirmation within `target_blocks` blocks.

        Exact published targets (1, 3, 6, 144) map to their field; other
        targets take the rate of the bracket they fall in.
        """
        estimates = await self.get_fee_estimates()

        if target_blocks in _TARGET_FIELDS:
            return estimates[_TARGET_FIELDS[target_blocks]]
        if target_blocks <= 3:
            return estimates["fastestFee"]
        if target_blocks <= 6:
            return estimates["halfHourFee"]
        if target_blocks <= 144:
            return estimates["hourFee"]
        return estimates["economyFee"]

    async def calculate_optimal_fee(
        self,
        size_vbytes: int,
        target_blocks: int,
        urgency: str = "medium"
    ) -> dict:
        """
        Pick a fee rate for a transaction.

        Urgency picks a starting rate; a target faster than that rate's
        expected confirmation bumps to the fastest rate, a slower target
        drops to the economy rate.

        Args:
            size_vbytes: Transaction virtual size
            target_blocks: Desired confirmation target in blocks
            urgency: "high", "medium" or "low"

        Returns:
            Dict with fee_rate, total_fee_sats, estimated_confirmations,
            target_blocks and urgency
        """
        if urgency not in _URGENCY:
            raise ValueError(f"Unknown urgency '{urgency}'. Use one of: high, medium, low")

        estimates = await self.get_fee_estimates()
        field, estimated = _URGENCY[urgency]
        fee_rate = estimates[field]

        if target_blocks < estimated:
            fee_rate, estimated = estimates["fastestFee"], 1
        elif target_blocks > estimated:
            fee_rate, estimated = estimates["economyFee"], 144

        return {
            "fee_rate": fee_rate,
            "total_fee_sats": math.ceil(size_vbytes * fee_rate),
            "estimated_confirmations": estimated,
            "target_blocks": target_blocks,
            "urgency": urgency,
        }

    async def get_mempool_congestion(self) -> dict:
        """
        Classify mempool congestion by pending transaction count.

        Returns:
            Dict with level (low/medium/high/extreme), description,
            transaction_count and total_vsize
        """
        stats = await self.get_mempool_stats()
        count = stats["count"]

        level, description = "extreme", "Extreme congestion, use high fees or wait for better conditions"
        for limit, band, text in _CONGESTION_BANDS:
            if count < limit:
                level, description = band, text
                break

        return {
            "level": level,
            "description": description,
            "transaction_count": count,
            "total_vsize": stats["vsize"],
        }


# Default instance used by the convenience functions
mempool_fee_tool = MempoolFeeTool()


async def get_fee_estimates() -> dict:
    """Recommended fee rates from the default tool."""
    return await mempool_fee_tool.get_fee_estimates()


# ==============================================================================
# Tools
# ==============================================================================

async def _fee_estimates(params: dict) -> ToolResult:
    """Return fee estimates plus the congestion level."""
    try:
        estimates = await mempool_fee_tool.get_fee_estimates()
    except FeeDataUnavailableError as e:
        return ToolResult(success=False, error=str(e))

    data = {"estimates": estimates}
    if params.get("include_congestion", True):
        try:
            data["congestion"] = await mempool_fee_tool.get_mempool_congestion()
        except FeeDataUnavailableError as e:
            logger.warning("Congestion data unavailable", {"error": str(e)})
            data["congestion"] = None
    return ToolResult(success=True, data=data)


async def _optimal_fee(params: dict) -> ToolResult:
    """Quote a fee for a transaction size and target."""
    size = params.get("size_vbytes")
    if not isinstance(size, int) or size <= 0:
        return ToolResult(success=False, error="size_vbytes must be a positive integer")

    try:
        quote = await mempool_fee_tool.calculate_optimal_fee(
            size,
            params.get("target_blocks", 3),
            params.get("urgency", "medium"),
        )
    except (FeeDataUnavailableError, ValueError) as e:
        return ToolResult(success=False, error=str(e))
    return ToolResult(success=True, data=quote)


async def _recent_blocks(params: dict) -> ToolResult:
    """List recent blocks."""
    try:
        blocks = await mempool_fee_tool.get_recent_blocks(params.get("limit", 10))
    except FeeDataUnavailableError as e:
        return ToolResult(success=False, error=str(e))
    return ToolResult(success=True, data={"count": len(blocks), "blocks": blocks})


fee_estimates_tool = MCPTool(
    name="get_fee_estimates",
    description="Get recommended Bitcoin fee rates (sat/vB) and current mempool congestion.",
    parameters={
        "type": "object",
        "properties": {
            "include_congestion": {"type": "boolean", "default": True}
        },
        "required": []
    },
    execute=_fee_estimates
)

optimal_fee_tool = MCPTool(
    name="calculate_optimal_fee",
    description="Quote a fee rate and total fee for a transaction of a given size.",
    parameters={
        "type": "object",
        "properties": {
            "size_vbytes": {"type": "integer", "description": "Transaction virtual size"},
            "target_blocks": {"type": "integer", "default": 3},
            "urgency": {"type": "string", "enum": ["low", "medium", "high"], "default": "medium"}
        },
        "required": ["size_vbytes"]
    },
    execute=_optimal_fee
)

recent_blocks_tool = MCPTool(
    name="get_recent_blocks",
    description="List the most recent Bitcoin blocks with their fee statistics.",
    parameters={
        "type": "object",
        "properties": {
            "limit": {"type": "integer", "minimum": 1, "maximum": 15, "default": 10}
        },
        "required": []
    },
    execute=_recent_blocks
)


def register_fee_tools(registry: ToolRegistry) -> None:
    """Register the fee tools with a registry."""
    registry.register(fee_estimates_tool)
    registry.register(optimal_fee_tool)
    registry.register(recent_blocks_tool)
    logger.debug("Registered fee tools")
