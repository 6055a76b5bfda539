"""
Assessment Generator
====================

Builds quizzes and graded assessments for Bitcoin topics.

Question types and where they come from:

| Type            | Source                                              |
|-----------------|-----------------------------------------------------|
| multiple_choice | Socratic question bank, four generic options        |
| true_false      | Socratic question bank                              |
| short_answer    | Socratic question bank                              |
| scenario        | Scenario templates filled with live price and fees  |
| calculation     | Calculation templates filled with live market data  |
| reflection      | Fixed reflection prompts                            |

Live data:
    Scenario and calculation questions fetch the BTC price and mempool fee
    estimates concurrently. A failed fetch falls back to a fixed price of
    $50,000 and fees of 10/5/3/2/1 sat/vB, so question generation never
    fails because a market API is down.

Scoring:
    points = round(base[difficulty] * multiplier[type]), halves rounded up

Assessments are cached for 30 minutes per (topic, difficulty, count).
Concurrent identical requests share one generation, and every caller gets
its own deep copy of the cached assessment.
"""

import asyncio
import copy
import math
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable

from src.agents.base import BaseAgent, Clock
from src.agents.socratic_tutor import SocraticTutor
from src.tools.btc_price import btc_price
from src.tools.fee_estimates import get_fee_estimates
from src.utils.cache import TTLCache, cache_store

ASSESSMENT_CACHE_SECONDS = 30 * 60

QUESTION_TYPES = ("multiple_choice", "true_false", "short_answer", "scenario", "calculation", "reflection")
DEFAULT_QUESTION_TYPES = ["multiple_choice", "true_false", "scenario"]
DIFFICULTIES = ("beginner", "intermediate", "advanced")

FALLBACK_PRICE = {"usd": 50000}

BASE_POINTS = {"beginner": 2, "intermediate": 3, "advanced": 5}
TYPE_MULTIPLIER = {
    "multiple_choice": 1,
    "true_false": 0.5,
    "short_answer": 1.5,
    "scenario": 2,
    "calculation": 2,
    "reflection": 3,
}
PASSING_SCORES = {"beginner": 70, "intermediate": 75, "advanced": 80}

MULTIPLE_CHOICE_OPTIONS = [
    "This is the correct answer based on Bitcoin fundamentals",
    "This is a common misconception about Bitcoin",
    "This answer confuses Bitcoin with traditional banking",
    "This answer is technically incorrect about the protocol",
]

SCENARIO_TEMPLATES: dict[str, dict[str, list[str]]] = {
    "fees": {
        "beginner": [
            "You want to buy coffee with Bitcoin. The coffee costs $5 and the current Bitcoin price is {price}. How much Bitcoin would you need?",
            "Your friend says Bitcoin is \"just internet money.\" How would you explain what makes Bitcoin different from regular digital payments?",
            "You see Bitcoin's price went down 10% today. Your friend is panicking. What would you tell them?",
        ],
        "intermediate": [
            "You need to send Bitcoin to a friend urgently, but the mempool is congested. The fee estimates are: Fast: {fast_fee} sat/vB, Medium: {medium_fee} sat/vB. Your transaction is 250 bytes. Calculate the fees and explain your choice.",
            "A merchant offers a 2% discount for Bitcoin payments due to lower fees. Your purchase is $1000. Current Bitcoin price is {price}. Is this a good deal?",
            "You're explaining Bitcoin to your grandmother. She asks \"Who controls Bitcoin?\" How do you explain decentralization in simple terms?",
        ],
        "advanced": [
            "Lightning Network vs on-chain: You need to make 50 small payments of $10 each over the next month. Current on-chain fee is {fast_fee} sat/vB for 250-byte transactions. When would Lightning make sense?",
            "A country announces Bitcoin as legal tender. Analyze the potential impacts on: adoption, price volatility, and local economy.",
            "You're setting up a Bitcoin treasury strategy for a company. Bitcoin is at {price}. What factors would you consider for position sizing?",
        ],
    },
    "mining": {
        "beginner": [
            "You want to send Bitcoin to your friend. Current fees are {fast_fee} sat/vB for fast confirmation. Your transaction is 250 bytes. How much will you pay in fees?",
            "Bitcoin fees are higher during weekdays. When might be the best time to make a non-urgent transaction?",
            "You accidentally set a very low fee. Your transaction has been pending for 2 hours. What are your options?",
        ],
        "intermediate": [
            "Mempool is congested with 100MB of transactions. Current fee rates: Fast: {fast_fee}, Medium: {medium_fee}, Slow: {slow_fee} sat/vB. You need confirmation within 3 blocks. What strategy would you use?",
            "You're batching 10 payments. Individual transactions would cost {fast_fee} sat/vB each (250 bytes). A batch transaction is 800 bytes. Calculate the savings.",
            "Replace-by-Fee (RBF): Your 5 sat/vB transaction is stuck. New recommended fee is 15 sat/vB. How much extra will you pay?",
        ],
        "advanced": [
            "Child-Pays-for-Parent: Your incoming transaction with 2 sat/vB fee is stuck. You need those funds urgently. Current fast fee is {fast_fee} sat/vB. Design a CPFP strategy.",
            "Fee market analysis: 1-week average fee was 5 sat/vB, yesterday was 50 sat/vB. Current mempool size is trending down. What does this suggest about optimal timing?",
            "You're building a Bitcoin service. Design a fee estimation algorithm that balances user experience with cost efficiency.",
        ],
    },
}

SCENARIO_EXPLANATIONS: dict[str, dict[str, list[str]]] = {
    "fees": {
        "beginner": [
            "This scenario tests basic Bitcoin calculation and value understanding.",
            "Focus on explaining Bitcoin's unique properties clearly and simply.",
            "Consider both the emotional and rational aspects of Bitcoin volatility.",
        ],
    },
    "mining": {
        "beginner": [
            "Calculate: fee = transaction size × fee rate. Consider confirmation time needs.",
            "Lower network usage typically occurs on weekends and late nights.",
            "Options include: wait, use RBF (Replace-by-Fee), or CPFP (Child-Pays-for-Parent).",
        ],
    },
}
DEFAULT_SCENARIO_EXPLANATION = "Analyze this scenario considering technical, economic, and practical factors."

FEE_RATE_TEMPLATE = "Calculate the fee for a transaction: Size = {size} bytes, Fee rate = {rate} sat/vB"
SATS_TO_BTC_TEMPLATE = "Convert satoshis to Bitcoin: {satoshis} satoshis = ? BTC"

CALCULATION_TEMPLATES: dict[str, dict[str, list[str]]] = {
    "fees": {
        "beginner": [
            FEE_RATE_TEMPLATE,
            SATS_TO_BTC_TEMPLATE,
            "Fee in USD: Transaction fee is {fee_btc} BTC, Bitcoin price is {price} USD",
        ],
        "intermediate": [
            "Batch transaction savings: 5 individual transactions (250 bytes each) vs 1 batch (800 bytes), Fee rate = {rate} sat/vB",
            "RBF fee calculation: Original fee {original_fee} sat/vB, new fee {new_fee} sat/vB, transaction size {size} bytes",
            "Percentage of transaction value: Sending {amount} BTC, fee is {fee} BTC, what percentage?",
        ],
        "advanced": [
            "CPFP effective fee rate: Parent transaction 200 bytes at 2 sat/vB, child needs 300 bytes to achieve 20 sat/vB overall",
            "Fee optimization: 10 outputs to consolidate, each UTXO costs 148 bytes to spend, current fee {rate} sat/vB vs future fee {future_rate} sat/vB",
            "Lightning vs on-chain cost analysis: 20 payments of 0.001 BTC each, on-chain fee {fee} BTC per tx, Lightning channel costs",
        ],
    },
    "mining": {
        "beginner": [
            "Convert Bitcoin to USD: {btc_amount} BTC at current price {price} USD",
            "Bitcoin supply calculation: Current year is 2024, blocks mined = {blocks}, reward per block = 6.25 BTC",
            "Transaction confirmation: Block time is 10 minutes, how long for 6 confirmations?",
        ],
        "intermediate": [
            "Market cap calculation: Bitcoin price {price} USD, total supply ~19.5M BTC",
            "Hash rate and security: If hash rate doubles, how does this affect mining difficulty?",
            "Volatility calculation: Bitcoin was {price1} yesterday, {price2} today. Calculate percentage change",
        ],
    },
}

CALCULATION_HINTS = {
    "beginner": [
        "Remember: 1 Bitcoin = 100,000,000 satoshis",
        "Transaction fee = Size in bytes × Fee rate in sat/vB",
        "Use current market prices for USD conversions",
    ],
    "intermediate": [
        "Consider both the mathematical calculation and practical implications",
        "Think about how network congestion affects fee rates",
        "Remember to account for all inputs and outputs",
    ],
    "advanced": [
        "Consider the broader economic and technical context",
        "Think about optimization strategies and trade-offs",
        "Analyze both short-term and long-term implications",
    ],
}

REFLECTION_PROMPTS = {
    "fees": [
        "Describe a situation where paying higher fees would be worth it, and one where it wouldn't.",
        "How do transaction fees contribute to Bitcoin's security model?",
        "What trade-offs exist between transaction cost, speed, and decentralization?",
        "Reflect on how Bitcoin might change the global financial system in the next 10 years.",
        "What are the most important trade-offs someone should consider before using Bitcoin?",
    ],
    "mining": [
        "Analyze the environmental concerns around Bitcoin mining and potential solutions.",
        "How does mining contribute to Bitcoin's decentralization and security?",
        "What role should renewable energy play in Bitcoin mining's future?",
    ],
}

# Fixed inputs for calculation problems
CALC_SIZE_VBYTES = 250
CALC_SATOSHIS = 100_000
CALC_FEE_BTC = 0.00001
CALC_AMOUNT_BTC = 0.01
CALC_BTC_AMOUNT = 0.001
CALC_BLOCKS_MINED = 840_000
SATS_PER_BTC = 100_000_000


def _drop_none(data: dict) -> dict:
    return {key: value for key, value in data.items() if value is not None}


def _format_number(value: float) -> str:
    """Integral floats print without a trailing .0."""
    return str(int(value)) if float(value).is_integer() else str(value)


def points_for(difficulty: str, question_type: str) -> int:
    """Points for a question, rounding halves away from zero."""
    raw = BASE_POINTS.get(difficulty, 2) * TYPE_MULTIPLIER.get(question_type, 1)
    return math.floor(raw + 0.5)


def fill_template(template: str, values: dict[str, str]) -> str:
    """Replace every `{name}` placeholder present in `values`."""
    for name, value in values.items():
        template = template.replace("{" + name + "}", value)
    return template


# ==============================================================================
# Data model
# ==============================================================================

@dataclass
class AssessmentQuestion:
    """
    One assessment question.

    Optional fields only appear for the types that use them (options and
    correct_answer for choice-like types, hints for calculations,
    live_data_context for questions built from market data).
    """
    id: str
    type: str
    difficulty: str
    topic: str
    question: str
    explanation: str
    points: int
    options: list[str] | None = None
    correct_answer: Any = None
    time_limit_seconds: int | None = None
    hints: list[str] | None = None
    live_data_context: dict | None = None

    def to_dict(self) -> dict:
        return _drop_none(asdict(self))


@dataclass
class PerformanceLevel:
    points: int
    description: str


@dataclass
class AssessmentRubric:
    """
    Grading rubric with four bands: excellent, good, satisfactory,
    needs_improvement.
    """
    criteria: str
    points_possible: int
    performance_levels: dict[str, PerformanceLevel]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AssessmentConfig:
    """Request for a full assessment."""
    topic: str
    difficulty: str = "beginner"
    question_count: int = 5
    title: str | None = None
    question_types: list[str] | None = None
    time_limit_minutes: int | None = None
    passing_score: int | None = None
    include_live_data: bool = True

    @classmethod
    def from_args(cls, args: dict) -> "AssessmentConfig":
        return cls(
            topic=args.get("topic", "fees"),
            difficulty=args.get("difficulty", "beginner"),
            question_count=args.get("question_count", 5),
            title=args.get("title"),
            question_types=args.get("question_types"),
            time_limit_minutes=args.get("time_limit_minutes"),
            passing_score=args.get("passing_score"),
            include_live_data=args.get("include_live_data", True),
        )


@dataclass
class Assessment:
    """A complete, graded assessment."""
    id: str
    title: str
    description: str
    topic: str
    difficulty: str
    questions: list[AssessmentQuestion]
    total_points: int
    time_limit_minutes: int
    passing_score_percentage: int
    feedback_templates: dict[str, str]
    rubrics: list[AssessmentRubric] | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "topic": self.topic,
            "difficulty": self.difficulty,
            "questions": [q.to_dict() for q in self.questions],
            "total_points": self.total_points,
            "time_limit_minutes": self.time_limit_minutes,
            "passing_score_percentage": self.passing_score_percentage,
            "feedback_templates": dict(self.feedback_templates),
        }
        if self.rubrics is not None:
            data["rubrics"] = [r.to_dict() for r in self.rubrics]
        return data


def build_rubrics() -> list[AssessmentRubric]:
    return [
        AssessmentRubric(
            criteria="Technical Understanding",
            points_possible=25,
            performance_levels={
                "excellent": PerformanceLevel(25, "Demonstrates deep technical understanding with accurate use of terminology"),
                "good": PerformanceLevel(20, "Shows solid technical knowledge with minor gaps"),
                "satisfactory": PerformanceLevel(15, "Basic technical understanding with some misconceptions"),
                "needs_improvement": PerformanceLevel(10, "Limited technical understanding, significant gaps"),
            },
        ),
        AssessmentRubric(
            criteria="Practical Application",
            points_possible=25,
            performance_levels={
                "excellent": PerformanceLevel(25, "Can effectively apply concepts to real-world scenarios"),
                "good": PerformanceLevel(20, "Good practical application with minor issues"),
                "satisfactory": PerformanceLevel(15, "Basic application skills, needs development"),
                "needs_improvement": PerformanceLevel(10, "Difficulty applying concepts practically"),
            },
        ),
    ]


def feedback_templates_for(topic: str) -> dict[str, str]:
    return {
        "excellent": f"Excellent work! You demonstrate a strong understanding of {topic} concepts and can apply them effectively in real-world scenarios.",
        "good": f"Good job! You have a solid grasp of {topic} fundamentals with room to deepen your practical application skills.",
        "satisfactory": f"Satisfactory performance. You understand basic {topic} concepts but should focus on improving practical application and analysis.",
        "needs_improvement": f"More study needed. Review the {topic} materials and practice applying concepts to real-world Bitcoin scenarios.",
    }


# ==============================================================================
# Generator
# ==============================================================================

class AssessmentGenerator(BaseAgent):
    """
    Generates questions and assessments.

    Example:
        generator = AssessmentGenerator()
        assessment = await generator.generate_assessment(
            AssessmentConfig(topic="fees", difficulty="intermediate", question_count=6)
        )
        print(assessment.total_points, len(assessment.questions))
    """

    name = "AssessmentGenerator"

    tools = [
        {
            "name": "generate_assessment",
            "description": "Generate a complete graded assessment for a Bitcoin topic.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "topic": {"type": "string", "description": "fees, mining, wallets, scaling or security"},
                    "difficulty": {"type": "string", "enum": list(DIFFICULTIES)},
                    "question_count": {"type": "integer", "minimum": 1, "maximum": 50},
                    "question_types": {"type": "array", "items": {"type": "string", "enum": list(QUESTION_TYPES)}},
                    "time_limit_minutes": {"type": "integer", "minimum": 1},
                    "passing_score": {"type": "integer", "minimum": 0, "maximum": 100},
                    "include_live_data": {"type": "boolean", "default": True}
                },
                "required": ["topic", "difficulty", "question_count"]
            }
        },
        {
            "name": "generate_questions",
            "description": "Generate assessment questions of the requested types.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "topic": {"type": "string"},
                    "difficulty": {"type": "string", "enum": list(DIFFICULTIES)},
                    "count": {"type": "integer", "minimum": 0},
                    "question_types": {"type": "array", "items": {"type": "string", "enum": list(QUESTION_TYPES)}}
                },
                "required": ["topic", "difficulty", "count"]
            }
        },
        {
            "name": "generate_scenario_questions",
            "description": "Generate scenario questions filled with live price and fee data.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "topic": {"type": "string", "enum": list(SCENARIO_TEMPLATES)},
                    "difficulty": {"type": "string", "enum": list(DIFFICULTIES)},
                    "count": {"type": "integer", "minimum": 0}
                },
                "required": ["topic", "difficulty", "count"]
            }
        },
        {
            "name": "generate_calculation_questions",
            "description": "Generate fee and price calculation questions with current market data.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "topic": {"type": "string", "enum": list(CALCULATION_TEMPLATES)},
                    "difficulty": {"type": "string", "enum": list(DIFFICULTIES)},
                    "count": {"type": "integer", "minimum": 0}
                },
                "required": ["topic", "difficulty", "count"]
            }
        },
    ]

    def __init__(
        self,
        tutor: SocraticTutor | None = None,
        cache: TTLCache | None = None,
        price_fetcher: Callable[[], Awaitable[dict]] | None = None,
        fee_fetcher: Callable[[], Awaitable[dict]] | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None
    ):
        """
        Args:
            tutor: Source of choice-like questions
            cache: Assessment cache (defaults to the shared cache_store)
            price_fetcher: Coroutine returning {"usd": price}
            fee_fetcher: Coroutine returning mempool fee estimates
            rng: Random source (true/false answers)
            clock: Time source for ids and live data stamps
        """
        super().__init__(rng=rng, clock=clock)
        self.cache = cache if cache is not None else cache_store
        self.tutor = tutor or SocraticTutor(cache=self.cache, rng=self.rng, clock=self.clock)
        self.price_fetcher = price_fetcher or btc_price
        self.fee_fetcher = fee_fetcher or get_fee_estimates
        self.logger.debug("AssessmentGenerator initialized with question banks for multiple topics")

    def _handlers(self) -> dict:
        return {
            "generate_assessment": self._assessment_tool,
            "generate_questions": self._questions_tool,
            "generate_scenario_questions": self._scenario_tool,
            "generate_calculation_questions": self._calculation_tool,
        }

    # ==========================================================================
    # Questions
    # ==========================================================================

    async def generate_questions(
        self,
        topic: str,
        difficulty: str,
        count: int,
        question_types: list[str] | None = None
    ) -> list[AssessmentQuestion]:
        """
        Generate `count` questions split evenly across `question_types`.

        Each type contributes up to ceil(count / len(types)) questions in
        type order; the concatenation is truncated to `count`. Types with
        small template banks may contribute fewer.

        Raises:
            ValueError: If a choice-like type is requested for a topic or
                level the question bank does not have
        """
        types = question_types or DEFAULT_QUESTION_TYPES
        if count <= 0:
            return []
        per_type = math.ceil(count / len(types))

        questions: list[AssessmentQuestion] = []
        for question_type in types:
            if question_type in ("multiple_choice", "true_false", "short_answer"):
                socratic = await self.tutor.generate_questions(topic, difficulty, per_type)
                batch = [
                    self._convert_socratic(text, question_type, topic, difficulty, index)
                    for index, text in enumerate(socratic.questions)
                ]
            elif question_type == "scenario":
                batch = await self.generate_scenario_questions(topic, difficulty, per_type)
            elif question_type == "calculation":
                batch = await self.generate_calculation_questions(topic, difficulty, per_type)
            elif question_type == "reflection":
                batch = self.generate_reflection_questions(topic, difficulty, per_type)
            else:
                self.logger.warning(f"Skipping unknown question type: {question_type}")
                batch = []

            questions.extend(batch[:per_type])

        return questions[:count]

    def _convert_socratic(
        self,
        text: str,
        question_type: str,
        topic: str,
        difficulty: str,
        index: int
    ) -> AssessmentQuestion:
        question = AssessmentQuestion(
            id=f"{question_type}_{topic}_{difficulty}_{index + 1}",
            type=question_type,
            difficulty=difficulty,
            topic=topic,
            question=text,
            explanation=f"This question tests understanding of {topic} concepts.",
            points=points_for(difficulty, question_type),
        )

        if question_type == "multiple_choice":
            question.options = list(MULTIPLE_CHOICE_OPTIONS)
            question.correct_answer = 0
        elif question_type == "true_false":
            question.options = ["True", "False"]
            question.correct_answer = self.rng.randint(0, 1)

        return question

    async def _live_data(self) -> tuple[dict, dict]:
        """Price and fee estimates, each replaced by a default on failure."""
        async def price() -> dict:
            try:
                return await self.price_fetcher()
            except Exception as e:
                self.logger.warning("Using fallback BTC price", {"error": str(e)})
                return dict(FALLBACK_PRICE)

        async def fees() -> dict:
            try:
                return await self.fee_fetcher()
            except Exception as e:
                self.logger.warning("Using fallback fee estimates", {"error": str(e)})
                return {
                    "fastestFee": 10,
                    "halfHourFee": 5,
                    "economyFee": 2,
                    "hourFee": 3,
                    "minimumFee": 1,
                    "timestamp": self.now_ms(),
                }

        price_data, fee_data = await asyncio.gather(price(), fees())
        return price_data, fee_data

    def _live_context(self, price_data: dict, fee_data: dict) -> dict:
        return {
            "btc_price_usd": price_data["usd"],
            "fee_estimates": dict(fee_data),
            "generated_at": self.now_iso(),
        }

    async def generate_scenario_questions(
        self,
        topic: str,
        difficulty: str,
        count: int
    ) -> list[AssessmentQuestion]:
        """
        Scenario questions with the live price and fees filled in.

        Returns an empty list for topics or levels without templates.
        """
        templates = SCENARIO_TEMPLATES.get(topic, {}).get(difficulty)
        if not templates:
            return []

        price_data, fee_data = await self._live_data()
        values = {
            "price": f"${round(price_data['usd']):,}",
            "fast_fee": str(fee_data.get("fastestFee", 10)),
            "medium_fee": str(fee_data.get("halfHourFee", 5)),
            "slow_fee": str(fee_data.get("economyFee", 2)),
        }

        questions = []
        for index, template in enumerate(templates[:max(count, 0)]):
            questions.append(AssessmentQuestion(
                id=f"scenario_{topic}_{difficulty}_{index + 1}",
                type="scenario",
                difficulty=difficulty,
                topic=topic,
                question=fill_template(template, values),
                correct_answer="Open-ended scenario analysis",
                explanation=self._scenario_explanation(topic, difficulty, index),
                points=points_for(difficulty, "scenario"),
                time_limit_seconds=300,
                live_data_context=self._live_context(price_data, fee_data),
            ))

        return questions

    def _scenario_explanation(self, topic: str, difficulty: str, index: int) -> str:
        explanations = SCENARIO_EXPLANATIONS.get(topic, {}).get(difficulty, [])
        if index < len(explanations):
            return explanations[index]
        return DEFAULT_SCENARIO_EXPLANATION

    async def generate_calculation_questions(
        self,
        topic: str,
        difficulty: str,
        count: int
    ) -> list[AssessmentQuestion]:
        """
        Calculation problems using the live price and fastest fee rate.

        Returns an empty list for topics or levels without templates.
        """
        templates = CALCULATION_TEMPLATES.get(topic, {}).get(difficulty)
        if not templates:
            return []

        price_data, fee_data = await self._live_data()

        questions = []
        for index, template in enumerate(templates[:max(count, 0)]):
            question, answer, explanation = self._calculation_problem(template, price_data, fee_data)
            questions.append(AssessmentQuestion(
                id=f"calculation_{topic}_{difficulty}_{index + 1}",
                type="calculation",
                difficulty=difficulty,
                topic=topic,
                question=question,
                correct_answer=answer,
                explanation=explanation,
                points=points_for(difficulty, "calculation"),
                time_limit_seconds=180 if difficulty == "advanced" else 120,
                hints=list(CALCULATION_HINTS.get(difficulty, CALCULATION_HINTS["advanced"])),
                live_data_context=self._live_context(price_data, fee_data),
            ))

        return questions

    def _calculation_problem(self, template: str, price_data: dict, fee_data: dict) -> tuple[str, str, str]:
        """Fill a calculation template and work out the answer where it is closed-form."""
        price = price_data["usd"]
        rate = fee_data.get("fastestFee", 10)
        slow_rate = fee_data.get("economyFee", 2)
        fee_btc = CALC_SIZE_VBYTES * rate / SATS_PER_BTC

        values = {
            "size": str(CALC_SIZE_VBYTES),
            "rate": _format_number(rate),
            "satoshis": str(CALC_SATOSHIS),
            "price": f"{round(price):,}",
            "fee_btc": _format_number(CALC_FEE_BTC),
            "amount": _format_number(CALC_AMOUNT_BTC),
            "original_fee": _format_number(slow_rate),
            "new_fee": _format_number(rate),
            "fee": f"{fee_btc:.8f}".rstrip("0").rstrip("."),
            "future_rate": _format_number(slow_rate),
            "btc_amount": _format_number(CALC_BTC_AMOUNT),
            "blocks": f"{CALC_BLOCKS_MINED:,}",
            "price1": f"{round(price * 0.97):,}",
            "price2": f"{round(price):,}",
        }
        question = fill_template(template, values)

        if template == FEE_RATE_TEMPLATE:
            total = _format_number(CALC_SIZE_VBYTES * rate)
            answer = f"{total} satoshis"
            explanation = (
                f"Fee = Size × Fee Rate = {CALC_SIZE_VBYTES} bytes × {_format_number(rate)} sat/vB "
                f"= {total} satoshis"
            )
        elif template == SATS_TO_BTC_TEMPLATE:
            btc = _format_number(CALC_SATOSHIS / SATS_PER_BTC)
            answer = f"{btc} BTC"
            explanation = f"{CALC_SATOSHIS} satoshis ÷ 100,000,000 = {btc} BTC"
        else:
            answer = "See explanation for detailed calculation"
            explanation = "This calculation requires multiple steps based on current market conditions."

        return question, answer, explanation

    def generate_reflection_questions(
        self,
        topic: str,
        difficulty: str,
        count: int
    ) -> list[AssessmentQuestion]:
        prompts = REFLECTION_PROMPTS.get(topic, [])
        return [
            AssessmentQuestion(
                id=f"reflection_{topic}_{difficulty}_{index + 1}",
                type="reflection",
                difficulty=difficulty,
                topic=topic,
                question=prompt,
                explanation=(
                    "Reflection questions are assessed based on depth of analysis, "
                    "critical thinking, and understanding of key concepts."
                ),
                points=points_for(difficulty, "reflection"),
                time_limit_seconds=600,
            )
            for index, prompt in enumerate(prompts[:max(count, 0)])
        ]

    # ==========================================================================
    # Assessments
    # ==========================================================================

    async def generate_assessment(self, config: AssessmentConfig) -> Assessment:
        """
        Build (or reuse) an assessment.

        Cached for 30 minutes under assessment_{topic}_{difficulty}_{count}.
        The caller receives a deep copy of the cached assessment.

        Raises:
            ValueError: If questions cannot be generated for the topic
        """
        cache_key = f"assessment_{config.topic}_{config.difficulty}_{config.question_count}"

        async def build() -> Assessment:
            return await self._build_assessment(config)

        try:
            assessment = await self.cache.get_or_create(cache_key, build, ASSESSMENT_CACHE_SECONDS)
        except Exception as e:
            self.logger.error(f"Failed to generate assessment for {config.topic}", e)
            raise

        return copy.deepcopy(assessment)

    async def _build_assessment(self, config: AssessmentConfig) -> Assessment:
        title = config.title or f"{config.topic.title()} {config.difficulty.title()} Assessment"
        self.logger.info(f"Generating assessment: {title} ({config.topic}, {config.difficulty})")

        questions = await self.generate_questions(
            config.topic,
            config.difficulty,
            config.question_count,
            config.question_types,
        )
        total_points = sum(q.points for q in questions)

        assessment = Assessment(
            id=f"{config.topic}-{config.difficulty}-{self.now_ms()}",
            title=title,
            description=(
                f"{config.difficulty.capitalize()} level assessment covering {config.topic} "
                f"with {config.question_count} questions. Tests practical understanding and "
                f"application of Bitcoin concepts."
            ),
            topic=config.topic,
            difficulty=config.difficulty,
            questions=questions,
            total_points=total_points,
            time_limit_minutes=config.time_limit_minutes or total_points * 2,
            passing_score_percentage=config.passing_score or PASSING_SCORES.get(config.difficulty, 70),
            feedback_templates=feedback_templates_for(config.topic),
        )
        if config.difficulty == "advanced":
            assessment.rubrics = build_rubrics()

        self.logger.info(
            f"Assessment generated: {len(questions)} questions, {total_points} points"
        )
        return assessment

    # ==========================================================================
    # Tool adapters
    # ==========================================================================

    async def _assessment_tool(self, args: dict) -> dict:
        assessment = await self.generate_assessment(AssessmentConfig.from_args(args))
        return assessment.to_dict()

    async def _questions_tool(self, args: dict) -> dict:
        questions = await self.generate_questions(
            args.get("topic", "fees"),
            args.get("difficulty", "beginner"),
            args.get("count", 5),
            args.get("question_types"),
        )
        return {"questions": [q.to_dict() for q in questions], "count": len(questions)}

    async def _scenario_tool(self, args: dict) -> dict:
        questions = await self.generate_scenario_questions(
            args.get("topic", "fees"), args.get("difficulty", "beginner"), args.get("count", 3)
        )
        return {"questions": [q.to_dict() for q in questions], "count": len(questions)}

    async def _calculation_tool(self, args: dict) -> dict:
        questions = await self.generate_calculation_questions(
            args.get("topic", "fees"), args.get("difficulty", "beginner"), args.get("count", 3)
        )
        return {"questions": [q.to_dict() for q in questions], "count": len(questions)}
