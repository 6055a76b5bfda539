"""
Platform Strategy Mentor
========================

Scores publishing platforms for a Bitcoin educator and turns the scores into
a posting strategy.

Scoring:
    audience_fit        = (bitcoin_presence + educator_presence) / 2
    monetization        = mean(direct, indirect, partnership, community)
    overall_score       = mean(audience_fit, content_format_match,
                               monetization, discovery, engagement_reward)

Comparison ranks every platform by overall score: the top one is primary
(60% of effort), the next two share the remaining 40%, and anything under
60 is listed as a platform to avoid.
"""

from dataclasses import asdict, dataclass, field

from src.agents.base import BaseAgent

PLATFORMS = {
    "twitter": {
        "audience": {"bitcoin_presence": 95, "educator_presence": 70, "tech_savvy": 85,
                     "early_adopters": 90, "age_range": "25-45",
                     "engagement_style": "rapid, discussion-based"},
        "content_advantages": [
            "Thread format perfect for educational sequences",
            "Real-time engagement and discussion",
            "Bitcoin community very active",
            "Quote tweets enable commentary",
            "Lists and spaces for community building",
        ],
        "monetization": {"direct": 40, "indirect": 95, "partnership": 85, "community": 90},
        "algorithm": {"discovery": 80, "engagement_reward": 85, "educational_content": 75,
                      "consistency_importance": 90},
    },
    "substack": {
        "audience": {"bitcoin_presence": 70, "educator_presence": 85, "tech_savvy": 75,
                     "early_adopters": 70, "age_range": "30-50",
                     "engagement_style": "deep, thoughtful"},
        "content_advantages": [
            "Long-form educational content ideal",
            "Direct monetization through subscriptions",
            "Email list ownership",
            "Professional presentation",
            "Newsletter format builds loyalty",
        ],
        "monetization": {"direct": 95, "indirect": 70, "partnership": 60, "community": 75},
        "algorithm": {"discovery": 60, "engagement_reward": 70, "educational_content": 95,
                      "consistency_importance": 85},
    },
    "nostr": {
        "audience": {"bitcoin_presence": 98, "educator_presence": 45, "tech_savvy": 95,
                     "early_adopters": 100, "age_range": "25-40",
                     "engagement_style": "philosophical, technical"},
        "content_advantages": [
            "Censorship-resistant platform",
            "Bitcoin-native audience",
            "Direct Bitcoin payments (Lightning)",
            "No algorithm manipulation",
            "Authentic, unfiltered discussions",
        ],
        "monetization": {"direct": 85, "indirect": 60, "partnership": 70, "community": 95},
        "algorithm": {"discovery": 70, "engagement_reward": 60, "educational_content": 80,
                      "consistency_importance": 75},
    },
    "linkedin": {
        "audience": {"bitcoin_presence": 40, "educator_presence": 90, "tech_savvy": 65,
                     "early_adopters": 50, "age_range": "28-55",
                     "engagement_style": "professional, networking"},
        "content_advantages": [
            "Professional credibility building",
            "B2B networking for corporate training",
            "Long-form articles supported",
            "Educational content highly valued",
            "Less noise, more focused engagement",
        ],
        "monetization": {"direct": 30, "indirect": 85, "partnership": 95, "community": 70},
        "algorithm": {"discovery": 75, "engagement_reward": 80, "educational_content": 90,
                      "consistency_importance": 85},
    },
    "youtube": {
        "audience": {"bitcoin_presence": 80, "educator_presence": 85, "tech_savvy": 70,
                     "early_adopters": 65, "age_range": "20-50",
                     "engagement_style": "visual, tutorial-focused"},
        "content_advantages": [
            "Visual/interactive content perfect for Bitcoin education",
            "Long-form educational videos",
            "Searchable content library",
            "Multiple monetization options",
            "Community features (comments, live chat)",
        ],
        "monetization": {"direct": 85, "indirect": 80, "partnership": 90, "community": 85},
        "algorithm": {"discovery": 95, "engagement_reward": 90, "educational_content": 85,
                      "consistency_importance": 95},
    },
}

CONTENT_FORMAT_MATCH = {"twitter": 85, "substack": 95, "nostr": 75, "linkedin": 90, "youtube": 90}

PLATFORM_CONS = {
    "twitter": [
        "High noise-to-signal ratio",
        "Character limits restrict depth",
        "Algorithm changes frequently",
        "Toxicity can be high",
        "Direct monetization limited",
    ],
    "substack": [
        "Smaller audience reach",
        "Slower growth initially",
        "Less social interaction",
        "Discovery challenging",
        "Subscription fatigue among users",
    ],
    "nostr": [
        "Very small audience currently",
        "Technical barriers for mainstream users",
        "Limited discovery mechanisms",
        "Fewer educational creators",
        "Platform still maturing",
    ],
    "linkedin": [
        "Limited Bitcoin audience",
        "Professional constraints on content style",
        "Algorithm favors corporate content",
        "Less viral potential",
        "Slower engagement cycles",
    ],
    "youtube": [
        "High production time requirements",
        "Very competitive space",
        "Algorithm heavily favors consistency",
        "Significant time investment",
        "SEO optimization required",
    ],
}

# (threshold, sentence) bands checked top-down; the last entry is the fallback
STRATEGY_BANDS = {
    "twitter": [
        (80, "Primary platform: Daily threads, heavy engagement, community building"),
        (60, "Secondary platform: 3-4 tweets/week, selective engagement"),
        (None, "Minimal presence: Cross-post only"),
    ],
    "substack": [
        (80, "Primary long-form: Weekly newsletters, course integration"),
        (60, "Secondary content: Bi-weekly deep dives"),
        (None, "Not recommended for your content style"),
    ],
    "nostr": [
        (70, "Early adopter advantage: Regular posting, Lightning integration"),
        (50, "Experimental presence: Weekly posts, community observation"),
        (None, "Wait until platform matures"),
    ],
    "linkedin": [
        (75, "B2B focus: Weekly articles, corporate outreach"),
        (50, "Professional credibility: Monthly thought leadership"),
        (None, "Minimal professional presence only"),
    ],
    "youtube": [
        (85, "Major commitment: Weekly videos, full production"),
        (70, "Strategic content: Monthly high-value videos"),
        (None, "Consider starting with shorts/simple content"),
    ],
}

CONTENT_TYPES = {
    "twitter": [
        "Educational threads (8-12 tweets)",
        "Discovery question starters",
        "Student success stories",
        "Quick Bitcoin insights",
        "Live commentary on Bitcoin news",
    ],
    "substack": [
        "Long-form educational essays",
        "Course module deep-dives",
        "Student case studies",
        "Philosophy of education pieces",
        "Bitcoin analysis and commentary",
    ],
    "nostr": [
        "First-principles Bitcoin discussions",
        "Technical deep-dives",
        "Philosophy and sovereignty content",
        "Lightning payment experiments",
        "Uncensored Bitcoin education",
    ],
    "linkedin": [
        "Professional education articles",
        "Corporate Bitcoin adoption insights",
        "Educational methodology posts",
        "B2B partnership announcements",
        "Industry credibility content",
    ],
    "youtube": [
        "Interactive Bitcoin tutorials",
        "Screen-recorded course walkthroughs",
        "Student interview series",
        "Bitcoin concept explanations",
        "Educational methodology discussions",
    ],
}

POSTING_FREQUENCY = {
    "twitter": "Daily (1-2 threads + engagement)",
    "substack": "Weekly (Thursdays optimal)",
    "nostr": "3-4 times per week",
    "linkedin": "2-3 times per week",
    "youtube": "Weekly (Tuesdays/Thursdays optimal)",
}

SUCCESS_METRICS = {
    "twitter": [
        "Thread engagement rate (>5%)",
        "Profile visits from tweets",
        "Course link clicks",
        "Follower growth rate",
        "Quality of replies/discussions",
    ],
    "substack": [
        "Subscriber growth rate",
        "Open rate (>40%)",
        "Click-through rate to courses",
        "Paid conversion rate",
        "Newsletter engagement",
    ],
    "nostr": [
        "Zap (Lightning tip) volume",
        "Note engagement",
        "Follower quality over quantity",
        "Community building metrics",
        "Direct course sales",
    ],
    "linkedin": [
        "Article view count",
        "Professional connection requests",
        "B2B inquiry generation",
        "Corporate training leads",
        "Industry recognition",
    ],
    "youtube": [
        "Video watch time/retention",
        "Subscriber growth",
        "Course traffic from videos",
        "Comment engagement quality",
        "Search ranking for Bitcoin education",
    ],
}

BITCOIN_EDUCATION_STRATEGY = """
RECOMMENDED STRATEGY FOR BITCOIN EDUCATION:

1. PRIMARY: Twitter (80% effort)
   - Highest Bitcoin audience concentration
   - Thread format perfect for educational sequences
   - Real-time engagement and community building
   - Best for building initial audience

2. SECONDARY: Substack (15% effort)
   - Long-form content for serious students
   - Direct monetization through subscriptions
   - Email list ownership
   - Professional credibility

3. EXPERIMENTAL: Nostr (5% effort)
   - Most Bitcoin-native audience
   - Lightning payment integration
   - Early adopter advantage
   - Authentic, uncensored discussions

AVOID FOR NOW: LinkedIn (limited Bitcoin audience), YouTube (too time-intensive initially)
"""

BITCOIN_EDUCATION_REASONING = """
Bitcoin education specifically benefits from:
1. High Bitcoin audience concentration (Twitter/Nostr excel)
2. Thread/sequential content format (Twitter perfect)
3. Direct monetization options (Substack ideal)
4. Real-time discussion and engagement (Twitter superior)
5. Technical audience that appreciates depth (Nostr emerging)

Your discovery-based teaching style works best with:
- Interactive Q&A formats (Twitter threads)
- Sequential learning paths (Twitter/Substack)
- Community discussion (Twitter/Nostr)
- Professional long-form content (Substack)
"""


@dataclass
class PlatformAnalysis:
    """Scores (0-100) and guidance for one platform."""
    platform: str
    audience_fit: float
    content_format_match: float
    monetization_potential: float
    discoverability: float
    engagement_quality: float
    overall_score: float
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    recommended_strategy: str = ""
    content_types: list[str] = field(default_factory=list)
    posting_frequency: str = ""
    success_metrics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PlatformComparison:
    primary_platform: str
    secondary_platforms: list[str]
    avoid_platforms: list[str]
    cross_posting_strategy: str
    resource_allocation: dict[str, float]

    def to_dict(self) -> dict:
        return asdict(self)


def strategy_for(platform: str, score: float) -> str:
    """Score-banded strategy sentence; thresholds are strict."""
    bands = STRATEGY_BANDS.get(platform)
    if not bands:
        return "Platform not recommended"

    for threshold, sentence in bands:
        if threshold is None or score > threshold:
            return sentence
    return bands[-1][1]


def cross_posting_strategy(primary: str, secondary: list[str]) -> str:
    return (
        f"Primary ({primary}): Create original content here first, engage heavily\n"
        f"Secondary ({', '.join(secondary)}): Adapt primary content for each platform's format\n"
        "Cross-posting:\n"
        "- Same core message, different presentation\n"
        "- Platform-specific calls to action\n"
        "- Native engagement on each platform\n"
        "- Link back to primary platform for deeper engagement\n"
    )


def resource_allocation(primary: str, secondary: list[str]) -> dict[str, float]:
    allocation = {primary: 60}
    for platform in secondary:
        allocation[platform] = 40 / len(secondary)
    return allocation


class PlatformStrategyMentor(BaseAgent):
    """Platform scoring and cross-posting strategy."""

    name = "PlatformStrategyMentor"

    tools = [
        {
            "name": "analyze_platform",
            "description": "Scores a single platform for Bitcoin education and recommends a strategy",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "platform": {"type": "string", "enum": list(PLATFORMS)}
                },
                "required": ["platform"]
            }
        },
        {
            "name": "compare_platforms",
            "description": "Ranks all platforms and allocates effort between them",
            "inputSchema": {"type": "object", "properties": {}}
        },
        {
            "name": "get_bitcoin_education_recommendation",
            "description": "Returns the recommended platform mix for Bitcoin education",
            "inputSchema": {"type": "object", "properties": {}}
        },
    ]

    def _handlers(self) -> dict:
        return {
            "analyze_platform": lambda args: self.analyze_platform(args.get("platform", "")).to_dict(),
            "compare_platforms": lambda args: self.compare_platforms().to_dict(),
            "get_bitcoin_education_recommendation": lambda args: self.get_bitcoin_education_recommendation(),
        }

    def analyze_platform(self, platform: str) -> PlatformAnalysis:
        """
        Score one platform.

        Raises:
            ValueError: If the platform is not in the table
        """
        data = PLATFORMS.get(platform)
        if data is None:
            raise ValueError(f"Platform {platform} not found in analysis database")

        audience = data["audience"]
        money = data["monetization"]

        audience_fit = (audience["bitcoin_presence"] + audience["educator_presence"]) / 2
        content_match = CONTENT_FORMAT_MATCH.get(platform, 50)
        monetization = (money["direct"] + money["indirect"] + money["partnership"] + money["community"]) / 4
        discoverability = data["algorithm"]["discovery"]
        engagement = data["algorithm"]["engagement_reward"]
        overall = (audience_fit + content_match + monetization + discoverability + engagement) / 5

        return PlatformAnalysis(
            platform=platform,
            audience_fit=audience_fit,
            content_format_match=content_match,
            monetization_potential=monetization,
            discoverability=discoverability,
            engagement_quality=engagement,
            overall_score=overall,
            pros=list(data["content_advantages"]),
            cons=list(PLATFORM_CONS.get(platform, [])),
            recommended_strategy=strategy_for(platform, overall),
            content_types=list(CONTENT_TYPES.get(platform, [])),
            posting_frequency=POSTING_FREQUENCY.get(platform, "Platform-dependent"),
            success_metrics=list(SUCCESS_METRICS.get(platform, [])),
        )

    def compare_platforms(self) -> PlatformComparison:
        analyses = sorted(
            (self.analyze_platform(platform) for platform in PLATFORMS),
            key=lambda analysis: analysis.overall_score,
            reverse=True,
        )

        primary = analyses[0].platform
        secondary = [analysis.platform for analysis in analyses[1:3]]
        avoid = [analysis.platform for analysis in analyses if analysis.overall_score < 60]

        self.logger.info(f"Platform ranking: {', '.join(a.platform for a in analyses)}")

        return PlatformComparison(
            primary_platform=primary,
            secondary_platforms=secondary,
            avoid_platforms=avoid,
            cross_posting_strategy=cross_posting_strategy(primary, secondary),
            resource_allocation=resource_allocation(primary, secondary),
        )

    def get_bitcoin_education_recommendation(self) -> dict:
        return {
            "recommended_strategy": BITCOIN_EDUCATION_STRATEGY,
            "platform_priority": ["twitter", "substack", "nostr"],
            "reasoning": BITCOIN_EDUCATION_REASONING,
        }
