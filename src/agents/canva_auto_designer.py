"""
Canva Auto Designer
===================

Turns live Bitcoin market data into ready-to-import Canva material.

Run Flow:
    ┌──────────────┬──────────────┬────────────────────┐
    │ fee estimates│   BTC price  │  3 news headlines  │   (fetched concurrently)
    └──────┬───────┴──────┬───────┴─────────┬──────────┘
           │              │                 │
           ▼              ▼                 ▼
    congestion level + 3 Socratic prompts ("fees", beginner)
           │
           ▼
    exports/canva_auto_designs/bitcoin_designs.csv   (Canva Bulk Create)
           │
           ▼
    Canva connected? ── no ──▶ done, CSV stays for manual import
           │ yes
           ▼
    create the three education designs
           │
           ▼
    exports/canva_auto_designs/created_designs.json

Congestion is derived from the fast fee: High above 20 sat/vB, Medium
above 5, Low otherwise.
"""

import asyncio
import csv
import io
import json
from pathlib import Path
from typing import Awaitable, Callable

from src.agents.assessment_generator import FALLBACK_PRICE
from src.agents.base import BaseAgent
from src.agents.socratic_tutor import SocraticTutor
from src.tools.btc_price import btc_price
from src.tools.canva_api import CanvaTools, canva_tools
from src.tools.fee_estimates import get_fee_estimates
from src.tools.rss_news import fetch_bitcoin_news
from src.utils.config import get_config

OUTPUT_SUBDIR = "canva_auto_designs"
CSV_FILENAME = "bitcoin_designs.csv"
DESIGNS_FILENAME = "created_designs.json"

CSV_COLUMNS = [
    "design_type", "headline", "price", "fee_fast", "fee_medium", "fee_slow",
    "congestion", "prompt", "cta", "color_scheme",
]

TEMPLATE_COLUMNS = [
    "design_type", "headline", "price_placeholder", "fee_placeholder",
    "congestion_placeholder", "prompt_placeholder", "cta", "color_scheme",
]

DEFAULT_FEES = {"fast": 10, "medium": 5, "slow": 2}

FALLBACK_NEWS = [
    {"title": "Bitcoin Network Update", "link": "#"},
    {"title": "Lightning Growth", "link": "#"},
]

# design_type -> (headline, fallback prompt, call to action, color scheme)
DESIGN_ROWS = [
    ("price_alert", None, "Learn Bitcoin", "Learn More →", None),
    ("fee_guide", "Bitcoin Fee Calculator", "Understanding fees", "Calculate Fees →", "educational"),
    ("achievement", "Bitcoin Learning Complete!", "Bitcoin mastery", "Continue Learning →", "achievement"),
]

PROMPT_PREVIEW_LENGTH = 50


def congestion_level(fast_fee: float) -> str:
    if fast_fee > 20:
        return "High"
    if fast_fee > 5:
        return "Medium"
    return "Low"


def _format_price(usd: float) -> str:
    return f"${round(usd):,}"


class CanvaAutoDesigner(BaseAgent):
    """
    Daily Canva material from live market data.

    Example:
        designer = CanvaAutoDesigner()
        summary = await designer.run()
        print(summary["csv_path"])
    """

    name = "CanvaAutoDesigner"

    tools = [
        {
            "name": "create_canva_instructions",
            "description": "Markdown instructions for building today's designs in Canva, with live price and fees",
            "inputSchema": {"type": "object", "properties": {}, "required": []}
        },
        {
            "name": "generate_bulk_create_csv",
            "description": "Placeholder CSV template for Canva Bulk Create",
            "inputSchema": {"type": "object", "properties": {}, "required": []}
        },
        {
            "name": "generate_design_specs",
            "description": "Dimensions, colors and copy for the three education designs",
            "inputSchema": {"type": "object", "properties": {}, "required": []}
        },
        {
            "name": "run_canva_designer",
            "description": "Fetch live data, write the Bulk Create CSV and create designs in Canva when connected",
            "inputSchema": {"type": "object", "properties": {}, "required": []}
        },
    ]

    def __init__(
        self,
        tutor: SocraticTutor | None = None,
        canva: CanvaTools | None = None,
        price_fetcher: Callable[[], Awaitable[dict]] | None = None,
        fee_fetcher: Callable[[], Awaitable[dict]] | None = None,
        news_fetcher: Callable[[int], Awaitable[dict]] | None = None,
        exports_dir: Path | None = None,
        **kwargs
    ):
        """
        Args:
            tutor: Source of the educational prompts
            canva: Canva API wrapper (defaults to the shared instance)
            price_fetcher: Coroutine returning {"usd": price}
            fee_fetcher: Coroutine returning mempool fee estimates
            news_fetcher: Coroutine taking a count and returning {"items": [...]}
            exports_dir: Root export directory (defaults to config.exports_dir)
        """
        super().__init__(**kwargs)
        self.tutor = tutor or SocraticTutor(rng=self.rng, clock=self.clock)
        self.canva = canva or canva_tools
        self.price_fetcher = price_fetcher or btc_price
        self.fee_fetcher = fee_fetcher or get_fee_estimates
        self.news_fetcher = news_fetcher or fetch_bitcoin_news
        self._exports_dir = exports_dir

    @property
    def output_dir(self) -> Path:
        return (self._exports_dir or get_config().exports_dir) / OUTPUT_SUBDIR

    def _handlers(self) -> dict:
        return {
            "create_canva_instructions": lambda args: self._instructions_tool(),
            "generate_bulk_create_csv": lambda args: {"csv": self.generate_bulk_create_csv()},
            "generate_design_specs": lambda args: {"designs": self.generate_design_specs()},
            "run_canva_designer": lambda args: self.run(),
        }

    async def _instructions_tool(self) -> dict:
        return {"markdown": await self.create_canva_instructions()}

    # ==========================================================================
    # Live data
    # ==========================================================================

    async def _price(self) -> dict:
        try:
            return await self.price_fetcher()
        except Exception as e:
            self.logger.warning("Using fallback BTC price", {"error": str(e)})
            return dict(FALLBACK_PRICE)

    async def _fees(self) -> dict:
        try:
            return await self.fee_fetcher()
        except Exception as e:
            self.logger.warning("Using fallback fee estimates", {"error": str(e)})
            return {}

    async def _news(self, count: int) -> list[dict]:
        try:
            return (await self.news_fetcher(count))["items"]
        except Exception as e:
            self.logger.warning("Using fallback news headlines", {"error": str(e)})
            return [dict(item) for item in FALLBACK_NEWS]

    @staticmethod
    def fee_levels(fee_data: dict) -> dict:
        """fast/medium/slow from mempool estimates, 10/5/2 where missing."""
        return {
            "fast": fee_data.get("fastestFee") or DEFAULT_FEES["fast"],
            "medium": fee_data.get("halfHourFee") or DEFAULT_FEES["medium"],
            "slow": fee_data.get("economyFee") or DEFAULT_FEES["slow"],
        }

    # ==========================================================================
    # Static material
    # ==========================================================================

    async def create_canva_instructions(self) -> str:
        """Markdown guide with the current price, fast fee and congestion."""
        fee_data, price = await asyncio.gather(self._fees(), self._price())
        fast = self.fee_levels(fee_data)["fast"]

        self.logger.info(f"Creating Canva instructions (fast fee {fast} sat/vB)")

        return f"""# Canva Design Instructions

## Current Bitcoin Data
- **Price:** {_format_price(price["usd"])}
- **Fast Fee:** {fast} sat/vB
- **Congestion:** {congestion_level(fast)}

## Design Templates
1. **Price Alert** - Current Bitcoin price with trending indicator
2. **Fee Guide** - Educational fee comparison chart
3. **Achievement** - Learning completion certificate

## Color Schemes
- High congestion: Red/Orange (#FF4444)
- Medium congestion: Yellow/Gold (#FFD700)
- Low congestion: Green/Blue (#44CC44)

## Instructions
1. Import the generated CSV into Canva Bulk Create
2. Select appropriate template based on congestion level
3. Ensure text is readable with high contrast
4. Use consistent spacing and alignment"""

    def generate_bulk_create_csv(self) -> str:
        """Bulk Create template with placeholders where live values go."""
        rows = [
            ["price_alert", "₿ Price Update", "Learn More →", "dynamic"],
            ["fee_guide", "Bitcoin Fee Calculator", "Calculate Fees →", "educational"],
            ["achievement", "Bitcoin Learning Complete!", "Continue Learning →", "achievement"],
        ]
        placeholders = ["PRICE_HERE", "FEE_HERE", "CONGESTION_HERE", "PROMPT_HERE"]

        return _to_csv(
            TEMPLATE_COLUMNS,
            [[design_type, headline, *placeholders, cta, scheme] for design_type, headline, cta, scheme in rows],
        )

    def generate_design_specs(self) -> list[dict]:
        return [
            {
                "title": "Bitcoin Price Alert",
                "width": 1080,
                "height": 1080,
                "type": "social-media",
                "elements": {
                    "price": "$108000",
                    "fees": "5 sat/vB",
                    "congestion": "Low",
                    "colors": ["#44CC44", "#FFFFFF", "#333333"],
                    "call_to_action": "Learn More →",
                },
            },
            {
                "title": "Fee Education Guide",
                "width": 1200,
                "height": 800,
                "type": "educational",
                "elements": {
                    "price": "$108000",
                    "fees": "Fast: 10, Medium: 5, Slow: 2",
                    "congestion": "Medium",
                    "colors": ["#FFD700", "#FFFFFF", "#333333"],
                    "call_to_action": "Calculate Fees →",
                },
            },
            {
                "title": "Achievement Certificate",
                "width": 1600,
                "height": 900,
                "type": "certificate",
                "elements": {
                    "price": "$108000",
                    "fees": "1 sat/vB",
                    "congestion": "Low",
                    "colors": ["#4CAF50", "#FFD700", "#FFFFFF"],
                    "call_to_action": "Continue Learning →",
                },
            },
        ]

    # ==========================================================================
    # Live run
    # ==========================================================================

    def build_design_rows(self, price_usd: float, fees: dict, prompts: list[str]) -> list[list[str]]:
        """CSV rows for price_alert, fee_guide and achievement."""
        congestion = congestion_level(fees["fast"])
        price = _format_price(price_usd)

        rows = []
        for index, (design_type, headline, fallback_prompt, cta, scheme) in enumerate(DESIGN_ROWS):
            prompt = prompts[index][:PROMPT_PREVIEW_LENGTH] if index < len(prompts) else fallback_prompt
            if design_type == "price_alert":
                headline = f"₿ ${round(price_usd / 1000)}K"
                scheme = "urgent" if fees["fast"] > 10 else "calm"

            rows.append([
                design_type,
                headline,
                price,
                f"{fees['fast']} sat/vB",
                f"{fees['medium']} sat/vB",
                f"{fees['slow']} sat/vB",
                congestion,
                f"{prompt}...",
                cta,
                scheme,
            ])
        return rows

    async def run(self) -> dict:
        """
        Generate today's CSV and, when Canva is connected, the designs.

        Canva failures are logged; the CSV is written either way.

        Returns:
            Summary with bitcoin_data, csv_path, designs_path (or None),
            designs_created and news_headlines
        """
        fee_data, price, news = await asyncio.gather(self._fees(), self._price(), self._news(3))

        fees = self.fee_levels(fee_data)
        congestion = congestion_level(fees["fast"])
        prompts = (await self.tutor.generate_questions("fees", "beginner", 3)).questions

        self.logger.info(f"Bitcoin: {_format_price(price['usd'])}, fees: {fees['fast']} sat/vB ({congestion})")

        output_dir = self.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        csv_path = output_dir / CSV_FILENAME
        csv_path.write_text(_to_csv(CSV_COLUMNS, self.build_design_rows(price["usd"], fees, prompts)), encoding="utf-8")
        self.logger.info(f"CSV generated: {csv_path}")

        bitcoin_data = {
            "price": price["usd"],
            "fees": fees,
            "congestion": congestion,
            "prompts": prompts,
        }
        summary = {
            "bitcoin_data": bitcoin_data,
            "csv_path": str(csv_path),
            "designs_path": None,
            "designs_created": 0,
            "news_headlines": [item.get("title") for item in news],
        }

        connection = await self.canva.test_connection()
        if not connection.success:
            self.logger.warning(f"Canva connection failed - designs not created: {connection.error}")
            return summary

        result = await self.canva.create_bitcoin_education_designs(bitcoin_data)
        if not result.success or not result.data["designs"]:
            self.logger.warning(f"No designs were created: {result.error or 'Unknown error'}")
            return summary

        designs = result.data["designs"]
        designs_path = output_dir / DESIGNS_FILENAME
        designs_path.write_text(json.dumps({
            "created_at": self.now_iso(),
            "creation_method": result.data["method"],
            "bitcoin_data": bitcoin_data,
            "designs": designs,
            "educational_prompts": prompts[:3],
            "connection_info": connection.data,
            "news_headlines": summary["news_headlines"],
        }, indent=2, ensure_ascii=False), encoding="utf-8")

        self.logger.info(f"Created {len(designs)} Canva designs, saved {designs_path}")
        summary["designs_path"] = str(designs_path)
        summary["designs_created"] = len(designs)
        return summary


def _to_csv(header: list[str], rows: list[list[str]]) -> str:
    """Unquoted header line, every data field quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(header) + "\n")
    csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerows(rows)
    return buffer.getvalue()
