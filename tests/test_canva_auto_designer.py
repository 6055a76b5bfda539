"""
Tests for the Canva auto designer
=================================
"""

import csv
import io
import json
from types import SimpleNamespace

import httpx
import pytest

from src.agents.canva_auto_designer import (
    CSV_COLUMNS,
    CanvaAutoDesigner,
    _format_price,
    congestion_level,
)
from src.tools import ToolResult
from src.tools.btc_price import PriceUnavailableError

PROMPTS = [
    "What happens to your transaction when the mempool is full and you chose a very low fee?",
    "Why do miners prefer higher fees?",
    "How would you pick a fee for a payment that can wait a day?",
]


class FakeTutor:
    def __init__(self, questions=PROMPTS):
        self.questions = list(questions)
        self.calls = []

    async def generate_questions(self, topic, difficulty, count):
        self.calls.append((topic, difficulty, count))
        return SimpleNamespace(questions=self.questions[:count])


class FakeCanva:
    def __init__(self, connected=True, designs=None):
        self.connected = connected
        self.designs = designs if designs is not None else [{"id": "D1"}, {"id": "D2"}, {"id": "D3"}]
        self.received = None

    async def test_connection(self):
        if not self.connected:
            return ToolResult(success=False, error="Canva access token is not configured")
        return ToolResult(success=True, data={"user": "teacher"})

    async def create_bitcoin_education_designs(self, bitcoin_data):
        self.received = bitcoin_data
        return ToolResult(success=True, data={"designs": self.designs, "method": "rest_api"})


async def _price():
    return {"usd": 65400.0}


async def _fees():
    return {"fastestFee": 20, "halfHourFee": 12, "hourFee": 8, "economyFee": 4}


async def _news(count):
    return {"items": [{"title": f"Headline {i}", "link": f"https://news/{i}"} for i in range(count)]}


async def _price_down():
    raise PriceUnavailableError("Unable to fetch Bitcoin price")


async def _fees_down():
    raise httpx.ConnectError("mempool unreachable")


async def _news_down(count):
    raise httpx.ConnectError("feed unreachable")


def _designer(exports_dir, clock, tutor=None, canva=None, **fetchers) -> CanvaAutoDesigner:
    return CanvaAutoDesigner(
        tutor=tutor or FakeTutor(),
        canva=canva or FakeCanva(),
        price_fetcher=fetchers.get("price", _price),
        fee_fetcher=fetchers.get("fees", _fees),
        news_fetcher=fetchers.get("news", _news),
        exports_dir=exports_dir,
        clock=clock,
    )


def _read_csv(path) -> list[list[str]]:
    return list(csv.reader(io.StringIO(path.read_text(encoding="utf-8"))))


class TestHelpers:
    """Congestion and formatting."""

    @pytest.mark.parametrize("fast,expected", [(25, "High"), (21, "High"), (20, "Medium"), (6, "Medium"), (5, "Low")])
    def test_congestion_level(self, fast, expected) -> None:
        assert congestion_level(fast) == expected

    def test_format_price(self) -> None:
        assert _format_price(108000.4) == "$108,000"

    def test_fee_levels_default_missing_values(self) -> None:
        assert CanvaAutoDesigner.fee_levels({}) == {"fast": 10, "medium": 5, "slow": 2}
        assert CanvaAutoDesigner.fee_levels({"fastestFee": 30}) == {"fast": 30, "medium": 5, "slow": 2}


class TestDesignRows:
    """Rows for the Bulk Create CSV."""

    def test_price_alert_row(self, exports_dir, clock) -> None:
        rows = _designer(exports_dir, clock).build_design_rows(
            65400.0, {"fast": 20, "medium": 12, "slow": 4}, ["Short prompt"]
        )

        assert rows[0] == [
            "price_alert", "₿ $65K", "$65,400", "20 sat/vB", "12 sat/vB", "4 sat/vB",
            "Medium", "Short prompt...", "Learn More →", "urgent",
        ]

    def test_missing_prompts_use_fallbacks(self, exports_dir, clock) -> None:
        rows = _designer(exports_dir, clock).build_design_rows(
            50000, {"fast": 3, "medium": 2, "slow": 1}, ["Only one"]
        )

        assert [row[7] for row in rows] == ["Only one...", "Understanding fees...", "Bitcoin mastery..."]
        assert rows[0][9] == "calm"
        assert rows[1][9] == "educational"

    def test_prompts_truncated_to_preview(self, exports_dir, clock) -> None:
        rows = _designer(exports_dir, clock).build_design_rows(
            50000, {"fast": 3, "medium": 2, "slow": 1}, PROMPTS
        )

        assert rows[0][7] == PROMPTS[0][:50] + "..."


class TestStaticMaterial:
    """Template CSV, specs and instructions."""

    def test_bulk_create_template(self, exports_dir, clock) -> None:
        text = _designer(exports_dir, clock).generate_bulk_create_csv()
        lines = text.splitlines()

        assert lines[0] == (
            "design_type,headline,price_placeholder,fee_placeholder,"
            "congestion_placeholder,prompt_placeholder,cta,color_scheme"
        )
        assert lines[1].startswith('"price_alert","₿ Price Update","PRICE_HERE"')
        assert len(lines) == 4

    def test_design_specs_sizes(self, exports_dir, clock) -> None:
        specs = _designer(exports_dir, clock).generate_design_specs()

        assert [(s["width"], s["height"]) for s in specs] == [(1080, 1080), (1200, 800), (1600, 900)]

    @pytest.mark.asyncio
    async def test_instructions_include_live_values(self, exports_dir, clock) -> None:
        markdown = await _designer(exports_dir, clock).create_canva_instructions()

        assert "**Price:** $65,400" in markdown
        assert "**Fast Fee:** 20 sat/vB" in markdown
        assert "**Congestion:** Medium" in markdown


class TestRun:
    """Full daily run."""

    @pytest.mark.asyncio
    async def test_run_writes_csv_and_designs(self, exports_dir, clock) -> None:
        tutor = FakeTutor()
        canva = FakeCanva()

        summary = await _designer(exports_dir, clock, tutor=tutor, canva=canva).run()

        output = exports_dir / "canva_auto_designs"
        rows = _read_csv(output / "bitcoin_designs.csv")
        assert rows[0] == CSV_COLUMNS
        assert [row[0] for row in rows[1:]] == ["price_alert", "fee_guide", "achievement"]
        assert tutor.calls == [("fees", "beginner", 3)]

        assert summary["designs_created"] == 3
        assert summary["news_headlines"] == ["Headline 0", "Headline 1", "Headline 2"]
        assert canva.received["congestion"] == "Medium"
        assert canva.received["fees"] == {"fast": 20, "medium": 12, "slow": 4}

        saved = json.loads((output / "created_designs.json").read_text(encoding="utf-8"))
        assert saved["created_at"] == "2024-06-01T12:00:00+00:00"
        assert saved["creation_method"] == "rest_api"
        assert saved["designs"] == [{"id": "D1"}, {"id": "D2"}, {"id": "D3"}]
        assert saved["educational_prompts"] == PROMPTS
        assert saved["connection_info"] == {"user": "teacher"}

    @pytest.mark.asyncio
    async def test_disconnected_canva_keeps_csv(self, exports_dir, clock) -> None:
        summary = await _designer(exports_dir, clock, canva=FakeCanva(connected=False)).run()

        output = exports_dir / "canva_auto_designs"
        assert (output / "bitcoin_designs.csv").exists()
        assert not (output / "created_designs.json").exists()
        assert summary["designs_path"] is None
        assert summary["designs_created"] == 0

    @pytest.mark.asyncio
    async def test_no_designs_created(self, exports_dir, clock) -> None:
        summary = await _designer(exports_dir, clock, canva=FakeCanva(designs=[])).run()

        assert summary["designs_created"] == 0
        assert not (exports_dir / "canva_auto_designs" / "created_designs.json").exists()

    @pytest.mark.asyncio
    async def test_outages_fall_back(self, exports_dir, clock) -> None:
        summary = await _designer(
            exports_dir, clock, price=_price_down, fees=_fees_down, news=_news_down
        ).run()

        data = summary["bitcoin_data"]
        assert data["price"] == 50000
        assert data["fees"] == {"fast": 10, "medium": 5, "slow": 2}
        assert data["congestion"] == "Medium"
        assert summary["news_headlines"] == ["Bitcoin Network Update", "Lightning Growth"]

    @pytest.mark.asyncio
    async def test_unexpected_fetch_errors_fall_back(self, exports_dir, clock) -> None:
        async def price_keyerror():
            raise KeyError("usd")

        async def fees_typeerror():
            raise TypeError("unexpected payload")

        async def news_attributeerror(count):
            raise AttributeError("'str' object has no attribute 'get'")

        summary = await _designer(
            exports_dir, clock, price=price_keyerror, fees=fees_typeerror, news=news_attributeerror
        ).run()

        assert summary["bitcoin_data"]["price"] == 50000
        assert summary["bitcoin_data"]["fees"] == {"fast": 10, "medium": 5, "slow": 2}
        assert summary["news_headlines"] == ["Bitcoin Network Update", "Lightning Growth"]
