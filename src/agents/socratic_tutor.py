"""
Socratic Tutor
==============

Open-ended guiding questions drawn from a fixed question bank.

The bank covers five topics (fees, mining, wallets, scaling, security), each
with five questions at three levels. A request picks a random subset of the
requested level; the selection is cached for 30 minutes so repeated
requests within a lesson see the same questions.

The AssessmentGenerator converts these questions into multiple choice,
true/false and short answer items, and the Canva designer prints three of
them as prompts on its designs.
"""

import copy
import random
from dataclasses import asdict, dataclass, field

from src.agents.base import BaseAgent, Clock
from src.utils.cache import TTLCache, cache_store

LEVELS = ("beginner", "intermediate", "advanced")

# Selections stay stable for a lesson
QUESTION_CACHE_SECONDS = 30 * 60

QUESTION_BANK: dict[str, dict[str, list[str]]] = {
    "fees": {
        "beginner": [
            "What happens when many people want to send Bitcoin at the same time?",
            "Why do you think some transactions cost more than others?",
            "If Bitcoin blocks have limited space, how should we decide which transactions go first?",
            "What would happen if there were no transaction fees at all?",
            "How is a Bitcoin transaction fee similar to postage on a letter?",
        ],
        "intermediate": [
            "How does the mempool affect transaction fee pricing?",
            "What factors influence miners' decisions when selecting transactions?",
            "Why do fees fluctuate throughout the day and week?",
            "How do different transaction types (SegWit vs Legacy) affect fee calculation?",
            "What strategies can users employ to reduce their transaction fees?",
        ],
        "advanced": [
            "How does Replace-by-Fee (RBF) change fee market dynamics?",
            "What are the economic implications of the fee market for Bitcoin's security model?",
            "How do Child-Pays-for-Parent (CPFP) transactions affect fee estimation?",
            "What role do fee estimation algorithms play in wallet design?",
            "How might Layer 2 solutions impact the base layer fee market?",
        ],
    },
    "mining": {
        "beginner": [
            "What work are Bitcoin miners actually doing?",
            "Why do we need miners to validate transactions?",
            "How does mining make the Bitcoin network secure?",
            "What happens to miners when all 21 million Bitcoin are mined?",
            "Why does mining use so much energy?",
        ],
        "intermediate": [
            "How does mining difficulty adjustment maintain consistent block times?",
            "What is the relationship between hash rate and network security?",
            "How do mining pools affect decentralization?",
            "What economic factors influence a miner's profitability?",
            "How does the block reward halving affect mining incentives?",
        ],
        "advanced": [
            "How might mining centralization risks be mitigated?",
            "What are the long-term sustainability implications of Bitcoin mining?",
            "How do stranded energy sources benefit from Bitcoin mining?",
            "What role does mining play in global energy markets?",
            "How do different consensus mechanisms compare to Bitcoin's Proof of Work?",
        ],
    },
    "wallets": {
        "beginner": [
            "What's the difference between a Bitcoin address and a wallet?",
            "Why is your seed phrase so important to keep safe?",
            "What happens if you lose your private keys?",
            "How is a Bitcoin wallet different from a bank account?",
            "Why might you want multiple Bitcoin addresses?",
        ],
        "intermediate": [
            "What are the tradeoffs between hot and cold storage?",
            "How do multi-signature wallets enhance security?",
            "What privacy considerations should users make when choosing addresses?",
            "How do hardware wallets protect against malware?",
            "What is the purpose of HD (Hierarchical Deterministic) wallets?",
        ],
        "advanced": [
            "How do different derivation paths affect wallet compatibility?",
            "What are the security implications of various signature schemes?",
            "How do time-locked transactions enhance wallet functionality?",
            "What privacy techniques can advanced users employ?",
            "How do threshold signatures improve multi-party custody solutions?",
        ],
    },
    "scaling": {
        "beginner": [
            "Why can't Bitcoin just make blocks bigger to handle more transactions?",
            "What problems is the Lightning Network trying to solve?",
            "How is Lightning different from regular Bitcoin transactions?",
            "What tradeoffs do we make when using Layer 2 solutions?",
            "Why is scaling Bitcoin considered a difficult problem?",
        ],
        "intermediate": [
            "How do payment channels work in the Lightning Network?",
            "What are the liquidity management challenges in Lightning?",
            "How do different scaling approaches compare (bigger blocks vs Layer 2)?",
            "What role do routing nodes play in the Lightning Network?",
            "How do submarine swaps connect on-chain and off-chain Bitcoin?",
        ],
        "advanced": [
            "How might channel factories improve Lightning's efficiency?",
            "What are the economic incentives for Lightning routing nodes?",
            "How do different Layer 2 architectures handle sovereignty tradeoffs?",
            "What privacy enhancements are possible in second-layer solutions?",
            "How might new cryptographic techniques improve Bitcoin scaling?",
        ],
    },
    "security": {
        "beginner": [
            "What makes Bitcoin transactions irreversible?",
            "How does the blockchain prevent double-spending?",
            "Why is it important that Bitcoin is decentralized?",
            "What would happen if someone controlled 51% of mining power?",
            "How does cryptography protect your Bitcoin?",
        ],
        "intermediate": [
            "How do digital signatures prove ownership without revealing private keys?",
            "What security assumptions does Bitcoin's design rely on?",
            "How do nodes validate transactions and blocks?",
            "What are the different types of attacks on Bitcoin networks?",
            "How does proof-of-work prevent historical revision?",
        ],
        "advanced": [
            "How do quantum computers threaten current cryptographic security?",
            "What are the implications of different hash function choices?",
            "How do eclipse attacks work and how can they be prevented?",
            "What game theory concepts apply to Bitcoin's security model?",
            "How do soft forks maintain backward compatibility while upgrading security?",
        ],
    },
}

LEARNING_OBJECTIVES: dict[str, dict[str, list[str]]] = {
    "fees": {
        "beginner": [
            "Understand why transaction fees exist",
            "Recognize the relationship between network demand and fees",
            "Learn basic fee selection strategies",
        ],
        "intermediate": [
            "Analyze fee market dynamics",
            "Evaluate different fee estimation methods",
            "Optimize transaction timing and structure",
        ],
        "advanced": [
            "Understand complex fee mechanisms (RBF, CPFP)",
            "Analyze economic implications of fee markets",
            "Evaluate scaling solutions impact on fees",
        ],
    },
    "mining": {
        "beginner": [
            "Understand the role of miners in Bitcoin",
            "Recognize the connection between mining and security",
            "Learn about block rewards and incentives",
        ],
        "intermediate": [
            "Analyze mining difficulty and hash rate",
            "Understand mining pool economics",
            "Evaluate mining centralization risks",
        ],
        "advanced": [
            "Understand advanced mining concepts",
            "Analyze long-term mining sustainability",
            "Evaluate mining's role in energy markets",
        ],
    },
    "wallets": {
        "beginner": [
            "Understand basic wallet concepts",
            "Learn proper private key management",
            "Recognize different wallet types",
        ],
        "intermediate": [
            "Understand advanced wallet features",
            "Learn about wallet security best practices",
            "Evaluate different storage methods",
        ],
        "advanced": [
            "Master complex wallet technologies",
            "Understand advanced security schemes",
            "Implement privacy-preserving techniques",
        ],
    },
    "scaling": {
        "beginner": [
            "Understand Bitcoin's scaling challenges",
            "Learn about Layer 2 solutions",
            "Recognize scaling tradeoffs",
        ],
        "intermediate": [
            "Understand Lightning Network mechanics",
            "Analyze different scaling approaches",
            "Evaluate scaling solution tradeoffs",
        ],
        "advanced": [
            "Master advanced scaling concepts",
            "Understand economic incentives in scaling",
            "Evaluate future scaling technologies",
        ],
    },
    "security": {
        "beginner": [
            "Understand Bitcoin's security model",
            "Learn about cryptographic protection",
            "Recognize decentralization importance",
        ],
        "intermediate": [
            "Understand advanced security concepts",
            "Learn about attack vectors and defenses",
            "Analyze network security properties",
        ],
        "advanced": [
            "Master cryptographic security concepts",
            "Understand advanced attack scenarios",
            "Evaluate future security challenges",
        ],
    },
}


@dataclass
class SocraticQuestions:
    """
    A set of guiding questions.

    Attributes:
        topic: Topic (or comma-joined topics for mixed sets)
        questions: Selected questions
        difficulty_level: beginner, intermediate or advanced
        learning_objectives: What the questions aim to teach
    """
    topic: str
    questions: list[str]
    difficulty_level: str
    learning_objectives: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def learning_objectives_for(topic: str, level: str) -> list[str]:
    objectives = LEARNING_OBJECTIVES.get(topic, {}).get(level)
    return list(objectives) if objectives else [f"Learn about {topic} at {level} level"]


class SocraticTutor(BaseAgent):
    """
    Serves Socratic questions from the bank.

    Example:
        tutor = SocraticTutor()
        result = await tutor.generate_questions("fees", "beginner", 3)
        for q in result.questions:
            print(q)
    """

    name = "SocraticTutor"

    tools = [
        {
            "name": "generate_socratic_questions",
            "description": "Generate open-ended Socratic questions for a Bitcoin topic and level.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "topic": {"type": "string", "enum": list(QUESTION_BANK)},
                    "level": {"type": "string", "enum": list(LEVELS), "default": "beginner"},
                    "count": {"type": "integer", "minimum": 1, "maximum": 5, "default": 5}
                },
                "required": ["topic"]
            }
        },
        {
            "name": "generate_mixed_questions",
            "description": "Mix Socratic questions from several topics for a review session.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "topics": {"type": "array", "items": {"type": "string"}},
                    "level": {"type": "string", "enum": list(LEVELS), "default": "beginner"},
                    "questions_per_topic": {"type": "integer", "minimum": 1, "default": 2}
                },
                "required": ["topics"]
            }
        },
        {
            "name": "list_topics",
            "description": "List the topics available in the question bank.",
            "inputSchema": {"type": "object", "properties": {}, "required": []}
        },
    ]

    def __init__(
        self,
        cache: TTLCache | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None
    ):
        super().__init__(rng=rng, clock=clock)
        self.cache = cache if cache is not None else cache_store
        self.logger.debug("Initializing SocraticTutor with question bank")

    def _handlers(self) -> dict:
        return {
            "generate_socratic_questions": self._generate_tool,
            "generate_mixed_questions": self._mixed_tool,
            "list_topics": lambda args: {"topics": self.get_available_topics()},
        }

    async def generate_questions(
        self,
        topic: str,
        level: str = "beginner",
        count: int = 5
    ) -> SocraticQuestions:
        """
        Pick up to `count` random questions for a topic and level.

        Args:
            topic: Bank topic, matched case-insensitively
            level: beginner, intermediate or advanced
            count: Number of questions (capped at the bank size)

        Returns:
            SocraticQuestions with learning objectives

        Raises:
            ValueError: If the topic or level is not in the bank
        """
        cache_key = f"socratic_{topic}_{level}_{count}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            self.logger.info(f"Returning cached Socratic questions for {topic}")
            return copy.deepcopy(cached)

        try:
            self.logger.info(f"Generating Socratic questions for topic: {topic}, level: {level}")

            topic_questions = QUESTION_BANK.get(topic.lower())
            if topic_questions is None:
                raise ValueError(
                    f"Topic '{topic}' not found in question bank. "
                    f"Available topics: {', '.join(QUESTION_BANK)}"
                )

            level_questions = topic_questions.get(level)
            if level_questions is None:
                raise ValueError(f"Difficulty level '{level}' not available for topic '{topic}'")

            result = SocraticQuestions(
                topic=topic,
                questions=self._select(level_questions, count),
                difficulty_level=level,
                learning_objectives=learning_objectives_for(topic, level),
            )

        except ValueError as e:
            self.logger.error("Failed to generate Socratic questions", e)
            raise

        self.cache.set(cache_key, result, QUESTION_CACHE_SECONDS)
        return copy.deepcopy(result)

    def get_available_topics(self) -> list[str]:
        return list(QUESTION_BANK)

    async def generate_mixed_questions(
        self,
        topics: list[str],
        level: str = "beginner",
        questions_per_topic: int = 2
    ) -> SocraticQuestions:
        """
        Questions from several topics, shuffled together.

        Learning objectives are de-duplicated, keeping first-seen order.
        """
        questions: list[str] = []
        objectives: list[str] = []

        for topic in topics:
            result = await self.generate_questions(topic, level, questions_per_topic)
            questions.extend(result.questions)
            objectives.extend(result.learning_objectives)

        self.rng.shuffle(questions)
        return SocraticQuestions(
            topic=", ".join(topics),
            questions=questions,
            difficulty_level=level,
            learning_objectives=list(dict.fromkeys(objectives)),
        )

    def _select(self, questions: list[str], count: int) -> list[str]:
        shuffled = list(questions)
        self.rng.shuffle(shuffled)
        return shuffled[:max(0, min(count, len(shuffled)))]

    async def process(self, args: dict | None = None) -> dict:
        """
        Legacy entry point.

        Returns:
            {"prompts": [...], topic, questions, ..., "status": "success"} or
            {"message": "...", "status": "error"}
        """
        args = args or {}
        try:
            result = await self.generate_questions(
                args.get("topic") or "fees",
                args.get("level") or "beginner",
                args.get("count") or 5,
            )
        except ValueError as e:
            return {"message": str(e), "status": "error"}

        return {"prompts": result.questions, **result.to_dict(), "status": "success"}

    # ==========================================================================
    # Tool adapters
    # ==========================================================================

    async def _generate_tool(self, args: dict) -> dict:
        result = await self.generate_questions(
            args.get("topic", "fees"),
            args.get("level", "beginner"),
            args.get("count", 5),
        )
        return result.to_dict()

    async def _mixed_tool(self, args: dict) -> dict:
        result = await self.generate_mixed_questions(
            args.get("topics", []),
            args.get("level", "beginner"),
            args.get("questions_per_topic", 2),
        )
        return result.to_dict()
