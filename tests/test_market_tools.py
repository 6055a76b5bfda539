"""
Tests for market data tools
===========================

Tests for:
- CoinGecko price tool and its cache fallback
- mempool.space fee tool
- RSS news parsing
"""

import httpx
import pytest

from src.tools.btc_price import BitcoinPriceTool, PriceUnavailableError
from src.tools.fee_estimates import FeeDataUnavailableError, MempoolFeeTool
from src.tools.rss_news import fetch_bitcoin_news, parse_feed

FEES = {"fastestFee": 20, "halfHourFee": 12, "hourFee": 8, "economyFee": 4, "minimumFee": 1}

RSS = """<?xml version="1.0"?>
<rss version="2.0"><channel>
  <item>
    <title>Bitcoin hits new high</title>
    <link>https://news.test/high</link>
    <pubDate>Sat, 01 Jun 2024 10:00:00 GMT</pubDate>
    <description><![CDATA[<p>Price <b>soars</b> past records.</p>]]></description>
  </item>
  <item>
    <title>Lightning capacity grows</title>
    <link>https://news.test/ln</link>
    <description>More channels</description>
  </item>
  <item>
    <title>Third item</title>
    <link>https://news.test/3</link>
  </item>
</channel></rss>"""


# ============================================================================
# Price
# ============================================================================


class TestBitcoinPriceTool:
    """CoinGecko spot price."""

    @pytest.mark.asyncio
    async def test_fetches_and_caches_price(self, cache, mock_client) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"bitcoin": {"usd": 65000}})

        tool = BitcoinPriceTool(cache=cache, client=mock_client(handler), base_url="https://cg.test")

        assert await tool.get_bitcoin_price("usd") == 65000.0
        assert await tool.get_bitcoin_price("USD") == 65000.0
        assert len(calls) == 1
        assert calls[0].url.params["ids"] == "bitcoin"
        assert calls[0].url.params["vs_currencies"] == "usd"

    @pytest.mark.asyncio
    async def test_refetches_after_fresh_window(self, cache, fake_clock, mock_client) -> None:
        prices = iter([65000, 66000])
        tool = BitcoinPriceTool(
            cache=cache,
            client=mock_client(lambda r: httpx.Response(200, json={"bitcoin": {"usd": next(prices)}})),
            base_url="https://cg.test",
        )

        await tool.get_bitcoin_price()
        fake_clock.advance(61)

        assert await tool.get_bitcoin_price() == 66000.0

    @pytest.mark.asyncio
    async def test_stale_price_used_when_api_fails(self, cache, fake_clock, mock_client) -> None:
        responses = iter([
            httpx.Response(200, json={"bitcoin": {"usd": 65000}}),
            httpx.Response(500),
        ])
        tool = BitcoinPriceTool(cache=cache, client=mock_client(lambda r: next(responses)), base_url="https://cg.test")

        await tool.get_bitcoin_price()
        fake_clock.advance(120)

        assert await tool.get_bitcoin_price() == 65000.0

    @pytest.mark.asyncio
    async def test_raises_without_cache(self, cache, mock_client) -> None:
        tool = BitcoinPriceTool(cache=cache, client=mock_client(lambda r: httpx.Response(503)), base_url="https://cg.test")

        with pytest.raises(PriceUnavailableError, match="Unable to fetch Bitcoin price"):
            await tool.get_bitcoin_price()

    @pytest.mark.parametrize("payload", [{"bitcoin": "unexpected"}, {"bitcoin": {"usd": "n/a"}}, ["bitcoin"]])
    @pytest.mark.asyncio
    async def test_malformed_payload_is_unavailable(self, cache, mock_client, payload) -> None:
        tool = BitcoinPriceTool(
            cache=cache, client=mock_client(lambda r: httpx.Response(200, json=payload)), base_url="https://cg.test"
        )

        with pytest.raises(PriceUnavailableError, match="Unable to fetch Bitcoin price"):
            await tool.get_bitcoin_price()

    @pytest.mark.asyncio
    async def test_history_maps_points_to_dates(self, cache, mock_client) -> None:
        payload = {"prices": [[1717200000000, 67000.5], [1717286400000, 67500.0]]}
        tool = BitcoinPriceTool(
            cache=cache,
            client=mock_client(lambda r: httpx.Response(200, json=payload)),
            base_url="https://cg.test",
        )

        history = await tool.get_bitcoin_price_history(days=2)

        assert history == [
            {"date": "2024-06-01", "price": 67000.5},
            {"date": "2024-06-02", "price": 67500.0},
        ]


# ============================================================================
# Fees
# ============================================================================


def _fee_tool(cache, mock_client, fees=FEES) -> MempoolFeeTool:
    return MempoolFeeTool(
        cache=cache,
        client=mock_client(lambda r: httpx.Response(200, json=fees)),
        base_url="https://mempool.test/api",
        now_ms=lambda: 1717243200000,
    )


class TestMempoolFeeTool:
    """Fee estimates and derived calculations."""

    @pytest.mark.asyncio
    async def test_fee_estimates_carry_timestamp(self, cache, mock_client) -> None:
        estimates = await _fee_tool(cache, mock_client).get_fee_estimates()

        assert estimates == {**FEES, "timestamp": 1717243200000}

    @pytest.mark.parametrize("target,expected", [
        (1, 20), (2, 20), (3, 12), (5, 12), (6, 8), (100, 8), (144, 4), (500, 4),
    ])
    @pytest.mark.asyncio
    async def test_fee_for_confirmation_brackets(self, cache, mock_client, target, expected) -> None:
        assert await _fee_tool(cache, mock_client).get_fee_for_confirmation(target) == expected

    @pytest.mark.asyncio
    async def test_optimal_fee_rounds_total_up(self, cache, mock_client) -> None:
        fees = {**FEES, "halfHourFee": 12.5}
        quote = await _fee_tool(cache, mock_client, fees).calculate_optimal_fee(141, target_blocks=3)

        assert quote == {
            "fee_rate": 12.5,
            "total_fee_sats": 1763,
            "estimated_confirmations": 3,
            "target_blocks": 3,
            "urgency": "medium",
        }

    @pytest.mark.asyncio
    async def test_optimal_fee_bumps_for_faster_target(self, cache, mock_client) -> None:
        quote = await _fee_tool(cache, mock_client).calculate_optimal_fee(250, target_blocks=1, urgency="low")

        assert quote["fee_rate"] == 20
        assert quote["estimated_confirmations"] == 1

    @pytest.mark.asyncio
    async def test_unknown_urgency_rejected(self, cache, mock_client) -> None:
        with pytest.raises(ValueError, match="Unknown urgency"):
            await _fee_tool(cache, mock_client).calculate_optimal_fee(250, 3, urgency="asap")

    @pytest.mark.parametrize("count,level", [(999, "low"), (4999, "medium"), (14999, "high"), (15000, "extreme")])
    @pytest.mark.asyncio
    async def test_congestion_levels(self, cache, mock_client, count, level) -> None:
        stats = {"count": count, "vsize": 1_000_000, "total_fee": 5_000_000}
        tool = _fee_tool(cache, mock_client, stats)

        congestion = await tool.get_mempool_congestion()

        assert congestion["level"] == level
        assert congestion["transaction_count"] == count

    @pytest.mark.asyncio
    async def test_raises_when_nothing_cached(self, cache, mock_client) -> None:
        tool = MempoolFeeTool(
            cache=cache,
            client=mock_client(lambda r: httpx.Response(502)),
            base_url="https://mempool.test/api",
        )

        with pytest.raises(FeeDataUnavailableError):
            await tool.get_fee_estimates()


# ============================================================================
# News
# ============================================================================


class TestNews:
    """RSS parsing."""

    def test_parse_feed_limits_and_cleans(self) -> None:
        items = parse_feed(RSS, 2)

        assert [item["title"] for item in items] == ["Bitcoin hits new high", "Lightning capacity grows"]
        assert items[0]["link"] == "https://news.test/high"
        assert items[0]["description"] == "Price soars past records."
        assert items[1]["published"] == ""

    @pytest.mark.asyncio
    async def test_fetch_bitcoin_news(self, mock_client) -> None:
        client = mock_client(lambda r: httpx.Response(200, text=RSS))

        news = await fetch_bitcoin_news(3, feed_url="https://news.test/rss", client=client)

        assert len(news["items"]) == 3
        assert news["source"] == "https://news.test/rss"
        assert "fetched_at" in news

    @pytest.mark.asyncio
    async def test_fetch_raises_on_http_error(self, mock_client) -> None:
        client = mock_client(lambda r: httpx.Response(404))

        with pytest.raises(httpx.HTTPError):
            await fetch_bitcoin_news(3, feed_url="https://news.test/rss", client=client)
