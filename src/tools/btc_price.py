"""
Bitcoin Price Tools
===================

Spot price, 24h details and price history from the CoinGecko public API.

Caching policy:
- Spot price: served from cache while younger than 60s, kept for 300s as a
  fallback when CoinGecko is unreachable
- Details: 120s fresh, 300s fallback
- History: 1 hour

`btc_price()` is the small collaborator the agents depend on. It returns
{"usd": <price>} and raises PriceUnavailableError when neither CoinGecko nor
the cache can answer, so callers decide their own default.

API Notes:
- GET /simple/price?ids=bitcoin&vs_currencies=usd
- GET /coins/bitcoin/market_chart?vs_currency=usd&days=7
- Unauthenticated requests are rate limited to a few dozen per minute
"""

import time
from datetime import datetime, timezone
from typing import Callable

import httpx

from src.tools import MCPTool, ToolRegistry, ToolResult
from src.tools.http import request_json
from src.utils.cache import TTLCache, cache_store
from src.utils.config import get_config
from src.utils.logger import Logger

logger = Logger("BtcPrice")

PRICE_FRESH_SECONDS = 60
PRICE_TTL_SECONDS = 300
DETAILS_FRESH_SECONDS = 120
HISTORY_TTL_SECONDS = 3600


class PriceUnavailableError(RuntimeError):
    """Raised when no live or cached price can be produced."""


class BitcoinPriceTool:
    """
    CoinGecko client with cache fallback.

    Example:
        tool = BitcoinPriceTool()
        price = await tool.get_bitcoin_price("usd")
        details = await tool.get_bitcoin_price_details("eur")
        history = await tool.get_bitcoin_price_history(days=30)
    """

    def __init__(
        self,
        cache: TTLCache | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        now_ms: Callable[[], int] | None = None
    ):
        """
        Args:
            cache: Cache to use (defaults to the shared cache_store)
            client: Optional shared HTTP client
            base_url: CoinGecko base URL (defaults to config)
            now_ms: Wall clock in milliseconds, for record timestamps
        """
        self.cache = cache if cache is not None else cache_store
        self.client = client
        self._base_url = base_url
        self._now_ms = now_ms or (lambda: int(time.time() * 1000))

    @property
    def base_url(self) -> str:
        return (self._base_url or get_config().price.api_url).rstrip("/")

    async def _simple_price(self, currency: str, detailed: bool = False) -> dict:
        params = {"ids": "bitcoin", "vs_currencies": currency}
        if detailed:
            params.update({
                "include_24hr_change": "true",
                "include_24hr_vol": "true",
                "include_market_cap": "true",
            })
        payload = await request_json(
            "GET", f"{self.base_url}/simple/price", params=params, client=self.client
        )
        data = payload.get("bitcoin") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not isinstance(data.get(currency), (int, float)):
            raise PriceUnavailableError(f"No price data available for {currency}")
        return data

    async def get_bitcoin_price(self, currency: str = "usd") -> float:
        """
        Get the current Bitcoin price.

        Args:
            currency: Quote currency code (usd, eur, ...)

        Returns:
            The price as a float

        Raises:
            PriceUnavailableError: If CoinGecko fails and nothing is cached
        """
        currency = currency.lower()
        cache_key = f"btc_price_{currency}"

        fresh = self.cache.get(cache_key, max_age_seconds=PRICE_FRESH_SECONDS)
        if fresh is not None:
            return fresh["price"]

        try:
            data = await self._simple_price(currency)
        except (httpx.HTTPError, ValueError, PriceUnavailableError) as e:
            logger.error("Failed to fetch Bitcoin price from CoinGecko", e)
            stale = self.cache.get(cache_key)
            if stale is not None:
                logger.warning("Using cached Bitcoin price due to API failure")
                return stale["price"]
            raise PriceUnavailableError("Unable to fetch Bitcoin price") from e

        price = float(data[currency])
        self.cache.set(cache_key, {
            "price": price,
            "currency": currency,
            "source": "CoinGecko",
            "timestamp": self._now_ms(),
        }, PRICE_TTL_SECONDS)
        return price

    async def get_bitcoin_price_details(self, currency: str = "usd") -> dict:
        """
        Get price plus 24h change, 24h volume and market cap.

        Returns:
            Dict with price, currency, source, timestamp, change24h,
            volume24h and marketCap
        """
        currency = currency.lower()
        cache_key = f"btc_price_details_{currency}"

        fresh = self.cache.get(cache_key, max_age_seconds=DETAILS_FRESH_SECONDS)
        if fresh is not None:
            return fresh

        try:
            data = await self._simple_price(currency, detailed=True)
        except (httpx.HTTPError, ValueError, PriceUnavailableError) as e:
            logger.error("Failed to fetch detailed Bitcoin price", e)
            stale = self.cache.get(cache_key)
            if stale is not None:
                logger.warning("Using cached Bitcoin price details due to API failure")
                return stale
            raise PriceUnavailableError("Unable to fetch Bitcoin price details") from e

        details = {
            "price": float(data[currency]),
            "currency": currency,
            "source": "CoinGecko",
            "timestamp": self._now_ms(),
            "change24h": data.get(f"{currency}_24h_change"),
            "volume24h": data.get(f"{currency}_24h_vol"),
            "marketCap": data.get(f"{currency}_market_cap"),
        }
        self.cache.set(cache_key, details, PRICE_TTL_SECONDS)
        return details

    async def get_bitcoin_price_history(self, currency: str = "usd", days: int = 7) -> list[dict]:
        """
        Get daily price points for the last `days` days.

        Returns:
            List of {"date": "YYYY-MM-DD", "price": float}
        """
        currency = currency.lower()
        cache_key = f"btc_history_{currency}_{days}"

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            payload = await request_json(
                "GET",
                f"{self.base_url}/coins/bitcoin/market_chart",
                params={"vs_currency": currency, "days": days},
                client=self.client,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch Bitcoin price history", e)
            raise PriceUnavailableError("Unable to fetch Bitcoin price history") from e

        history = [
            {
                "date": datetime.fromtimestamp(ts / 1000, tz=timezone.utc).date().isoformat(),
                "price": price,
            }
            for ts, price in payload.get("prices", [])
        ]
        self.cache.set(cache_key, history, HISTORY_TTL_SECONDS)
        return history


# Default instance used by the convenience functions
bitcoin_price_tool = BitcoinPriceTool()


async def get_bitcoin_price(currency: str = "usd") -> float:
    """Current Bitcoin price in `currency`."""
    return await bitcoin_price_tool.get_bitcoin_price(currency)


async def btc_price() -> dict[str, float]:
    """
    Current USD price in the shape the agents consume.

    Returns:
        {"usd": 65000.0}
    """
    return {"usd": await bitcoin_price_tool.get_bitcoin_price("usd")}


# ==============================================================================
# Tools
# ==============================================================================

async def _get_price(params: dict) -> ToolResult:
    """Return spot price details."""
    currency = params.get("currency") or get_config().price.currency
    try:
        details = await bitcoin_price_tool.get_bitcoin_price_details(currency)
    except PriceUnavailableError as e:
        return ToolResult(success=False, error=str(e))
    return ToolResult(success=True, data=details)


async def _get_price_history(params: dict) -> ToolResult:
    """Return daily price history."""
    currency = params.get("currency") or get_config().price.currency
    days = params.get("days", 7)
    if not isinstance(days, int) or days < 1:
        return ToolResult(success=False, error="Days must be a positive integer")
    try:
        history = await bitcoin_price_tool.get_bitcoin_price_history(currency, days)
    except PriceUnavailableError as e:
        return ToolResult(success=False, error=str(e))
    return ToolResult(success=True, data={"currency": currency, "days": days, "history": history})


price_tool = MCPTool(
    name="get_bitcoin_price",
    description="Get the current Bitcoin price with 24h change, volume and market cap.",
    parameters={
        "type": "object",
        "properties": {
            "currency": {
                "type": "string",
                "description": "Quote currency code, e.g. usd or eur",
                "default": "usd"
            }
        },
        "required": []
    },
    execute=_get_price
)

price_history_tool = MCPTool(
    name="get_bitcoin_price_history",
    description="Get daily Bitcoin prices for the last N days.",
    parameters={
        "type": "object",
        "properties": {
            "currency": {"type": "string", "default": "usd"},
            "days": {"type": "integer", "minimum": 1, "default": 7}
        },
        "required": []
    },
    execute=_get_price_history
)


def register_price_tools(registry: ToolRegistry) -> None:
    """Register the price tools with a registry."""
    registry.register(price_tool)
    registry.register(price_history_tool)
    logger.debug("Registered price tools")


__all__ = [
    "BitcoinPriceTool",
    "PriceUnavailableError",
    "bitcoin_price_tool",
    "get_bitcoin_price",
    "btc_price",
    "register_price_tools",
]
